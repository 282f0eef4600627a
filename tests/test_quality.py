"""Tests for the scene and video quality judge."""

from video_brain.models import (
    BackgroundAnimation,
    Beat,
    BeatType,
    EntryAnimation,
    HoldAnimation,
    ImageFrame,
    ImageKind,
    ImageRole,
    ImageTreatment,
    SceneImage,
    SceneType,
    Texture,
    VideoStyle,
)
from video_brain.scenes.quality import (
    QUALITY_CRITERIA,
    assess_scene,
    assess_video,
    auto_fix_scene,
    auto_fix_video,
    self_judge_scene,
)

PREMIUM = VideoStyle.PREMIUM_SAAS


def hero_image(kind):
    return SceneImage(
        image_id="img",
        role=ImageRole.HERO,
        kind=kind,
        treatment=ImageTreatment(frame=ImageFrame.NONE),
    )


class TestCriteria:
    """Tests for the criteria battery."""

    def test_criteria_order(self):
        """Test criteria are declared in a fixed order."""
        assert [c.id for c in QUALITY_CRITERIA] == [
            "not_slidelike",
            "has_beats",
            "has_temporal_progression",
            "has_texture_or_animation",
            "beats_have_animation",
            "proper_duration",
            "images_have_purpose",
            "no_logo_fullscreen",
        ]

    def test_only_some_criteria_repair(self):
        """Test exactly three criteria carry an automatic repair."""
        fixable = [c.id for c in QUALITY_CRITERIA if c.auto_fix is not None]
        assert fixable == ["not_slidelike", "has_texture_or_animation", "beats_have_animation"]


class TestAssessScene:
    """Tests for single-scene assessment."""

    def test_good_scene_passes(self, make_scene):
        """Test a staggered, textured, animated scene has no issues."""
        assessment = assess_scene(make_scene(), 0, PREMIUM)
        assert assessment.passed
        assert assessment.issues == []

    def test_slidelike_scene_fails(self, make_scene, make_beat):
        """Test simultaneous beats fail slide and progression checks."""
        beats = [make_beat(f"beat_{i}", start_frame=0) for i in range(3)]
        assessment = assess_scene(make_scene(beats=beats), 2, PREMIUM)
        assert not assessment.passed
        assert assessment.scene_index == 2
        assert "Scene must not look like a slide" in assessment.errors
        assert "Multi-beat scenes must have temporal progression" in assessment.errors

    def test_empty_scene(self, make_scene):
        """Test a scene without beats fails."""
        assessment = assess_scene(make_scene(beats=[]), 0, PREMIUM)
        assert "Scene must have at least one beat" in assessment.errors

    def test_missing_entry_is_warning(self, make_scene):
        """Test a beat without an entry animation only warns."""
        beats = [Beat(beat_id="b1", beat_type=BeatType.TEXT_APPEAR, duration_frames=60)]
        assessment = assess_scene(make_scene(beats=beats), 0, PREMIUM)
        assert assessment.passed
        assert assessment.warnings == ["All beats must have entry animation"]

    def test_duration_band_depends_on_style(self, make_scene):
        """Test duration bands differ between styles."""
        scene = make_scene(duration_frames=120)
        assert assess_scene(scene, 0, PREMIUM).warnings == []
        assert assess_scene(scene, 0, VideoStyle.SOCIAL_SHORT).warnings == [
            "Scene duration must be within style guidelines"
        ]

    def test_fullscreen_logo(self, make_scene):
        """Test a frameless hero logo is an error while a screenshot is fine."""
        logo = assess_scene(make_scene(images=[hero_image(ImageKind.LOGO)]), 0, PREMIUM)
        assert "Logos must not be fullscreen" in logo.errors

        screenshot = assess_scene(make_scene(images=[hero_image(ImageKind.SCREENSHOT)]), 0, PREMIUM)
        assert screenshot.passed

    def test_accent_image_warns(self, make_scene):
        """Test accent-only images are flagged as purposeless."""
        images = [SceneImage(image_id="deco", role=ImageRole.ACCENT)]
        assessment = assess_scene(make_scene(images=images), 0, PREMIUM)
        assert assessment.warnings == ["Images must have a defined role"]


class TestAutoFix:
    """Tests for deterministic scene repair."""

    def test_fixes_slidelike_scene(self, make_scene, make_beat):
        """Test a slide-like scene passes after one repair."""
        beats = [make_beat(f"beat_{i}", start_frame=0) for i in range(3)]
        scene = make_scene(beats=beats, texture=Texture.NONE, animation=BackgroundAnimation.STATIC)

        fixed, applied = auto_fix_scene(scene, PREMIUM)

        assert applied == ["not_slidelike"]
        assert assess_scene(fixed, 0, PREMIUM).passed

    def test_fills_animations(self, make_scene):
        """Test beats without entries get fade-in defaults."""
        beats = [
            Beat(beat_id="b1", beat_type=BeatType.TEXT_APPEAR, start_frame=0, duration_frames=40),
            Beat(beat_id="b2", beat_type=BeatType.TEXT_APPEAR, start_frame=30, duration_frames=40),
        ]
        fixed, applied = auto_fix_scene(make_scene(beats=beats), PREMIUM)
        assert applied == ["beats_have_animation"]
        for beat in fixed.beats:
            assert beat.animation.entry == EntryAnimation.FADE_IN
            assert beat.animation.entry_duration == 15
            assert beat.animation.hold == HoldAnimation.SUBTLE_FLOAT

    def test_auto_fix_is_idempotent(self, make_scene):
        """Test fixing an already-fixed scene changes nothing."""
        beats = [
            Beat(beat_id="b1", beat_type=BeatType.TEXT_APPEAR, start_frame=0),
            Beat(beat_id="b2", beat_type=BeatType.TEXT_APPEAR, start_frame=0),
        ]
        scene = make_scene(beats=beats, texture=Texture.NONE, animation=BackgroundAnimation.STATIC)

        once, applied = auto_fix_scene(scene, PREMIUM)
        twice, applied_again = auto_fix_scene(once, PREMIUM)

        assert applied
        assert applied_again == []
        assert twice == once

    def test_input_not_mutated(self, make_scene):
        """Test the original scene is left untouched."""
        scene = make_scene(texture=Texture.NONE, animation=BackgroundAnimation.STATIC)
        auto_fix_scene(scene, PREMIUM)
        assert scene.background.texture == Texture.NONE


class TestAssessVideo:
    """Tests for cross-scene assessment."""

    def test_well_formed_video(self, make_scene, make_beat):
        """Test a HOOK-to-CTA video with varied structure has no global issues."""
        scenes = [
            make_scene(scene_type=SceneType.HOOK),
            make_scene(scene_type=SceneType.SOLUTION, beats=[make_beat()]),
            make_scene(scene_type=SceneType.CTA),
        ]
        assessment = assess_video(scenes, PREMIUM, ["curious", "relieved", "motivated"])
        assert assessment.global_issues == []
        assert assessment.overall_passed
        assert assessment.total_scenes == 3

    def test_global_issues(self, make_scene):
        """Test structure, bookend and arc problems are all reported."""
        scenes = [make_scene(scene_type=SceneType.PROBLEM), make_scene(scene_type=SceneType.SOLUTION)]
        assessment = assess_video(scenes, PREMIUM, ["calm"])
        assert assessment.global_issues == [
            "Consecutive scenes have similar structures",
            "First scene should be a HOOK",
            "Last scene should be a CTA",
            "Emotional arc is too simple - needs more progression",
        ]
        assert not assessment.overall_passed

    def test_auto_fix_video_marks_fixed_scenes(self, make_scene):
        """Test only repaired scenes are marked as auto-fixed."""
        scenes = [
            make_scene(scene_type=SceneType.HOOK),
            make_scene(scene_type=SceneType.CTA, texture=Texture.NONE, animation=BackgroundAnimation.STATIC),
        ]
        fixed, assessment = auto_fix_video(scenes, PREMIUM, ["a", "b", "c"])
        assert [a.auto_fixed for a in assessment.scene_assessments] == [False, True]
        assert assessment.auto_fix_applied
        assert fixed[1].background.texture != Texture.NONE


class TestSelfJudgment:
    """Tests for the self-judgment questions."""

    def test_unvalidated_scene_is_not_worth_paying_for(self, make_scene):
        """Test scenes not yet validated fail the paid-ad question."""
        judgment = self_judge_scene(make_scene())
        assert not judgment.passed
        assert judgment.failed_questions == ["Would a real company pay for this?"]

    def test_validated_scene_passes(self, make_scene):
        """Test a validated, lively scene passes every question."""
        scene = make_scene().model_copy(update={"quality_validated": True})
        assert self_judge_scene(scene).passed
