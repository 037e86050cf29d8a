from falling_block_rl.game import ScoringRules, drop_interval_for


def test_lines_scored_at_current_level():
    rules = ScoringRules()
    assert rules.score_for_lines(0, 3) == 0
    assert rules.score_for_lines(1, 1) == 100
    assert rules.score_for_lines(2, 1) == 200
    assert rules.score_for_lines(4, 3) == 1200


def test_level_threshold_is_strict():
    rules = ScoringRules()
    assert not rules.should_level_up(500, 1)
    assert rules.should_level_up(501, 1)
    assert not rules.should_level_up(1000, 2)


def test_drop_interval_curve():
    assert drop_interval_for(1) == 1000
    assert drop_interval_for(2) == 950
    assert drop_interval_for(18) == 150
    assert drop_interval_for(19) == 100
    assert drop_interval_for(40) == 100
