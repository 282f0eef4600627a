"""Tests for the beat timing engine."""

import pytest

from video_brain.models import (
    BackgroundAnimation,
    Beat,
    BeatStrategy,
    BeatType,
    EntryAnimation,
    HoldAnimation,
    Pacing,
    RhythmDecision,
    Texture,
    VideoStyle,
)
from video_brain.planning.tempo import BeatTiming
from video_brain.scenes.beats import (
    calculate_beat_timing,
    default_entry_duration,
    enhance_beats,
    ensure_temporal_progression,
    fit_scene_to_beats,
    fix_slidelike_scene,
    has_temporal_progression,
    is_slidelike,
)


@pytest.fixture
def slide_scene(make_scene, make_beat):
    """Three text beats at frame 0 on a flat, static background."""
    beats = [
        make_beat(f"beat_{i}", start_frame=0, duration_frames=90, hold=HoldAnimation.STATIC)
        for i in range(1, 4)
    ]
    return make_scene(
        beats=beats,
        duration_frames=90,
        texture=Texture.NONE,
        animation=BackgroundAnimation.STATIC,
    )


class TestBeatTiming:
    """Tests for beat start and length distribution."""

    def test_single_beat_is_padded(self):
        """Test a lone beat gets a 10-frame lead and trail."""
        assert calculate_beat_timing(1, 90, Pacing.FAST) == [BeatTiming(10, 70)]

    def test_single_beat_in_tiny_scene(self):
        """Test a lone beat never gets a length below one frame."""
        assert calculate_beat_timing(1, 15, Pacing.CALM) == [BeatTiming(10, 1)]

    def test_multi_beat_uses_pacing(self):
        """Test multi-beat timing follows the pacing distribution."""
        timings = calculate_beat_timing(3, 90, Pacing.FAST)
        assert [t.start_frame for t in timings] == [0, 21, 42]

    def test_invalid_count(self):
        """Test zero beats raises ValueError."""
        with pytest.raises(ValueError):
            calculate_beat_timing(0, 90, Pacing.CALM)

    def test_default_entry_duration(self):
        """Test social entries are shorter than premium ones."""
        assert default_entry_duration(VideoStyle.PREMIUM_SAAS) == 15
        assert default_entry_duration(VideoStyle.SOCIAL_SHORT) == 10


class TestTemporalProgression:
    """Tests for spreading simultaneous beats."""

    def test_spreads_shared_start(self, make_beat):
        """Test beats sharing one start are spread evenly."""
        beats = [make_beat(f"beat_{i}", start_frame=0) for i in range(3)]
        spread = ensure_temporal_progression(beats, 90)
        assert [b.start_frame for b in spread] == [0, 30, 60]
        assert all(b.duration_frames == 30 for b in spread)

    def test_distinct_starts_untouched(self, make_beat):
        """Test beats that already progress are returned as-is."""
        beats = [make_beat("beat_1", start_frame=0), make_beat("beat_2", start_frame=20)]
        assert ensure_temporal_progression(beats, 90) is beats

    def test_single_beat_untouched(self, make_beat):
        """Test a single beat is returned as-is."""
        beats = [make_beat()]
        assert ensure_temporal_progression(beats, 90) is beats

    def test_intentional_single_moment(self, make_scene, make_beat):
        """Test single-moment scenes may start beats together."""
        beats = [make_beat("beat_1"), make_beat("beat_2")]
        rhythm = RhythmDecision(needs_multiple_beats=True, beat_strategy=BeatStrategy.SINGLE_MOMENT)
        assert has_temporal_progression(make_scene(beats=beats, rhythm=rhythm))
        assert not has_temporal_progression(make_scene(beats=beats))


class TestEnhanceBeats:
    """Tests for default animations and staggering."""

    def test_fills_missing_animation(self):
        """Test beats without an entry get the beat-type defaults."""
        beats = [Beat(beat_id="b1", beat_type=BeatType.TEXT_APPEAR, start_frame=0, duration_frames=40)]
        enhanced = enhance_beats(beats, VideoStyle.PREMIUM_SAAS)
        animation = enhanced[0].animation
        assert animation.entry == EntryAnimation.SLIDE_UP
        assert animation.entry_duration == 15
        assert animation.hold == HoldAnimation.SUBTLE_FLOAT

    def test_social_entry_duration(self):
        """Test social style fills shorter entries."""
        beats = [Beat(beat_id="b1", beat_type=BeatType.IMAGE_REVEAL)]
        animation = enhance_beats(beats, VideoStyle.SOCIAL_SHORT)[0].animation
        assert animation.entry == EntryAnimation.MASK_REVEAL
        assert animation.entry_duration == 10

    def test_existing_animation_kept(self, make_beat):
        """Test an explicit entry animation is not overwritten."""
        beat = make_beat(entry=EntryAnimation.POP, entry_duration=8)
        assert enhance_beats([beat], VideoStyle.PREMIUM_SAAS)[0] is beat

    def test_staggers_overlapping_starts(self, make_beat):
        """Test each beat starts no earlier than halfway through the previous one."""
        beats = [
            make_beat("beat_1", start_frame=0, duration_frames=40),
            make_beat("beat_2", start_frame=10, duration_frames=30),
            make_beat("beat_3", start_frame=25, duration_frames=30),
        ]
        enhanced = enhance_beats(beats, VideoStyle.PREMIUM_SAAS)
        assert [b.start_frame for b in enhanced] == [0, 20, 35]

    def test_input_not_mutated(self, make_beat):
        """Test the original beats keep their start frames."""
        beats = [make_beat("beat_1", duration_frames=40), make_beat("beat_2", start_frame=0)]
        enhance_beats(beats, VideoStyle.PREMIUM_SAAS)
        assert beats[1].start_frame == 0


class TestFitSceneToBeats:
    """Tests for growing scenes around their beats."""

    def test_grows_to_latest_end(self, make_scene, make_beat):
        """Test the scene grows to cover the latest beat."""
        scene = make_scene(beats=[make_beat(start_frame=80, duration_frames=40)], duration_frames=90)
        assert fit_scene_to_beats(scene).duration_frames == 120

    def test_never_shrinks(self, make_scene):
        """Test a scene longer than its beats keeps its duration."""
        scene = make_scene(duration_frames=150)
        assert fit_scene_to_beats(scene) is scene


class TestSlideDetection:
    """Tests for slide-like scene detection and repair."""

    def test_simultaneous_static_scene_is_slidelike(self, slide_scene):
        """Test three beats at frame 0 on a flat background read as a slide."""
        assert is_slidelike(slide_scene)

    def test_empty_scene_is_slidelike(self, make_scene):
        """Test a scene without beats is a slide."""
        assert is_slidelike(make_scene(beats=[]))

    def test_textured_progressive_scene_is_not_slidelike(self, make_scene):
        """Test the default staggered, textured scene passes."""
        assert not is_slidelike(make_scene())

    def test_same_start_different_types(self, make_scene, make_beat):
        """Test simultaneous beats of different types are not a slide on a live background."""
        beats = [
            make_beat("beat_1"),
            make_beat("beat_2", beat_type=BeatType.IMAGE_ENTER, text=None, image_id="app"),
        ]
        assert not is_slidelike(make_scene(beats=beats))

    def test_fix_slidelike_scene(self, slide_scene):
        """Test the repair adds texture and drift and spreads the beats."""
        fixed = fix_slidelike_scene(slide_scene, VideoStyle.PREMIUM_SAAS)

        assert fixed.background.texture == Texture.GRAIN
        assert fixed.background.texture_opacity == 0.05
        assert fixed.background.animation == BackgroundAnimation.SUBTLE_DRIFT
        assert [b.start_frame for b in fixed.beats] == [0, 30, 60]
        assert all(b.duration_frames == 30 for b in fixed.beats)
        assert not is_slidelike(fixed)
        assert has_temporal_progression(fixed)

    def test_fix_adds_missing_hold(self, make_scene):
        """Test beats without a hold animation get a subtle float."""
        beat = Beat(beat_id="b1", beat_type=BeatType.TEXT_APPEAR)
        scene = make_scene(beats=[beat], texture=Texture.NONE, animation=BackgroundAnimation.STATIC)
        fixed = fix_slidelike_scene(scene, VideoStyle.PREMIUM_SAAS)
        assert fixed.beats[0].animation.hold == HoldAnimation.SUBTLE_FLOAT

    def test_fix_keeps_existing_texture(self, make_scene, make_beat):
        """Test an existing texture and its opacity survive the repair."""
        scene = make_scene(beats=[make_beat("beat_1"), make_beat("beat_2")])
        fixed = fix_slidelike_scene(scene, VideoStyle.PREMIUM_SAAS)
        assert fixed.background.texture_opacity == 0.04
