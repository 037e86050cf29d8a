import numpy as np
import pytest

from falling_block_rl.visualization.audio import ToneNotifier, build_cues, mix, synthesize_tone


def test_tone_length_and_amplitude():
    samples = synthesize_tone(440, 0.1, "triangle", volume=0.5, sample_rate=8000)
    assert samples.dtype == np.int16
    assert len(samples) == 800
    assert np.abs(samples).max() <= int(0.5 * 32767)
    # Exponential decay envelope
    assert np.abs(samples[-40:]).max() < np.abs(samples[:40]).max()


@pytest.mark.parametrize("waveform", ["sine", "square", "sawtooth", "triangle"])
def test_every_waveform_is_supported(waveform):
    assert len(synthesize_tone(120, 0.05, waveform, sample_rate=8000)) == 400


def test_unknown_waveform():
    with pytest.raises(ValueError):
        synthesize_tone(100, 0.1, "noise")


def test_mix_offsets_parts():
    a = np.full(4, 100, dtype=np.int16)
    b = np.full(4, 50, dtype=np.int16)
    out = mix((a, 0.0), (b, 0.002), sample_rate=1000)
    assert out.tolist() == [100, 100, 150, 150, 50, 50]


def test_clear_cue_overlaps_second_note():
    cues = build_cues(sample_rate=1000)
    assert len(cues["drop"]) == 50
    assert len(cues["clear"]) == 150
    assert len(cues["game_over"]) == 500


def test_disabled_notifier_is_silent():
    notifier = ToneNotifier(enabled=False)
    assert notifier.sounds == {}
    notifier.on_lock()
    notifier.on_lines_cleared(2)
    notifier.on_game_over(100, 200)
