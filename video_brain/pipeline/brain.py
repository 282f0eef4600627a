"""
Video brain orchestrator.

Runs one generation request through the state machine

    analyzing_intent -> detecting_style -> planning_narrative ->
    structuring_scenes -> creating_beats -> validating_quality ->
    finalizing -> complete

The LLM call is the only await. Every other step is a pure pass over frozen
scenes, applied in a fixed order. Quality, hierarchy, tempo, palette and
breathing problems that survive their single repair are reported on the
result, as are unknown animation names replaced while parsing. Unparsable
responses and missing structure abort the request.
"""

from typing import Optional

from rich.console import Console

from ..config import Config
from ..models import (
    GenerationPhase,
    GenerationRequest,
    GenerationResult,
    QualityReport,
    Scene,
    VideoStyle,
    VisualFlow,
)
from ..planning.prompts import VIDEO_SYSTEM_PROMPT, build_user_prompt
from ..planning.tempo import adjust_video_tempo, plan_narrative_arc, validate_video_tempo
from ..profiles import DEFAULT_TABLES, ProfileTables
from ..scenes.beats import enhance_beats, fit_scene_to_beats
from ..scenes.breathing import auto_inject_breathing, strip_breathing, validate_video_breathing
from ..scenes.hierarchy import auto_fix_video_hierarchy, validate_video_hierarchy
from ..scenes.quality import assess_scene, assess_video, auto_fix_scene
from ..understanding.llm_provider import LLMProvider, get_llm_provider
from ..understanding.response_parser import parse_llm_response
from ..visual.image_patterns import assign_image_patterns
from ..visual.palette import apply_palette_to_video, select_palette, validate_palette_consistency
from ..visual.transitions import apply_transitions, plan_transition_sequence
from .progress import ProgressCallback, ProgressTracker, format_progress

console = Console()

SOCIAL_KEYWORDS = ("tiktok", "reels", "shorts", "viral", "quick", "fast", "snappy", "social")
PREMIUM_KEYWORDS = ("linkedin", "youtube", "b2b", "saas", "professional", "enterprise", "landing", "corporate")


def detect_style(request: GenerationRequest) -> VideoStyle:
    """Pick a style from prompt keywords unless the request forces one.

    Social wins only with strictly more keyword hits; ties go to premium.
    """
    if request.force_style is not None:
        return request.force_style

    prompt = request.prompt.lower()
    social = sum(1 for keyword in SOCIAL_KEYWORDS if keyword in prompt)
    premium = sum(1 for keyword in PREMIUM_KEYWORDS if keyword in prompt)
    return VideoStyle.SOCIAL_SHORT if social > premium else VideoStyle.PREMIUM_SAAS


def _scene_issues(issues: dict[int, list[str]]) -> list[str]:
    return [f"Scene {index}: {issue}" for index, found in sorted(issues.items()) for issue in found]


class VideoBrain:
    """Turns a marketing brief into a validated, timed scene graph.

    Args:
        config: Application config. Defaults to built-in defaults.
        llm: Text-generation provider. Built from the config when omitted.
        progress_callback: Default receiver of progress events.
        tables: Profile tables used by every pass.
        verbose: Print progress lines to the console.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        llm: Optional[LLMProvider] = None,
        progress_callback: Optional[ProgressCallback] = None,
        tables: ProfileTables = DEFAULT_TABLES,
        verbose: bool = False,
    ):
        self.config = config or Config()
        self.llm = llm or get_llm_provider(self.config)
        self.progress_callback = progress_callback
        self.tables = tables
        self.verbose = verbose

    def _tracker(self, callback: Optional[ProgressCallback]) -> ProgressTracker:
        receiver = callback or self.progress_callback

        def report(event) -> None:
            if receiver is not None:
                receiver(event)
            if self.verbose:
                console.print(f"[dim]{format_progress(event)}[/dim] {event.message}")

        return ProgressTracker(report, weights=self.tables.phase_weights)

    async def generate(
        self,
        request: GenerationRequest,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        """Generate a full video specification for one request.

        Args:
            request: The user's brief.
            progress_callback: Receiver for this run's progress events,
                overriding the one given at construction.

        Returns:
            GenerationResult with every scene enhanced and judged.

        Raises:
            ParseError: If the LLM response holds no JSON object.
            StructuralError: If the response has no usable scenes.
            LLMProviderError: If the LLM call itself fails.
        """
        tracker = self._tracker(progress_callback)
        brain_config = self.config.brain

        tracker.start_phase(GenerationPhase.ANALYZING_INTENT)
        tracker.complete_phase()

        tracker.start_phase(GenerationPhase.DETECTING_STYLE)
        style = detect_style(request)
        profile = self.tables.style_profile(style)
        tracker.update_progress(100, f"Style: {style.value}")

        tracker.start_phase(GenerationPhase.PLANNING_NARRATIVE)
        user_prompt = build_user_prompt(request, style, profile)
        response = await self.llm.generate(user_prompt, VIDEO_SYSTEM_PROMPT)
        tracker.complete_phase()

        tracker.start_phase(GenerationPhase.STRUCTURING_SCENES)
        parsed = parse_llm_response(response, request)
        scenes = parsed.scenes
        if self.verbose:
            for issue in parsed.issues:
                console.print(f"[yellow]{issue}[/yellow]")
        arc = plan_narrative_arc(len(scenes))
        tracker.update_progress(
            100,
            f"{len(scenes)} scenes, {arc.strategy.value} arc",
            total_scenes=len(scenes),
        )

        tracker.start_phase(GenerationPhase.CREATING_BEATS)
        scenes = self._create_beats(scenes, style, tracker)

        palette = select_palette(
            style,
            industry=brain_config.industry,
            mood=brain_config.mood,
            brand_color=brain_config.brand_color,
            tables=self.tables,
        )
        scenes = apply_palette_to_video(scenes, palette)

        injected = 0
        if brain_config.inject_breathing:
            scenes, injected = auto_inject_breathing(scenes, style, self.config.video.fps, self.tables)
        else:
            scenes, _ = strip_breathing(scenes, style, self.tables)
        if self.verbose and injected:
            console.print(f"[dim]Injected {injected} breathing moment(s)[/dim]")

        scenes = [assign_image_patterns(scene, style) for scene in scenes]
        tracker.complete_phase()

        tracker.start_phase(GenerationPhase.VALIDATING_QUALITY)
        scenes, quality_report = self._validate_quality(scenes, style, tracker)
        video_assessment = assess_video(scenes, style, parsed.emotional_arc)

        tracker.start_phase(GenerationPhase.FINALIZING)
        sequence = plan_transition_sequence(scenes, style, self.tables)
        scenes = apply_transitions(scenes, sequence)

        visual_flow = VisualFlow(
            coherence_score=sequence.coherence_score,
            patterns_used=sorted(
                {image.pattern for scene in scenes for image in scene.images if image.pattern is not None},
                key=lambda pattern: pattern.value,
            ),
            transitions_used=sequence.transitions_used,
        )

        result = GenerationResult(
            style=style,
            style_profile=profile,
            concept=parsed.concept,
            emotional_arc=parsed.emotional_arc,
            scenes=scenes,
            total_duration_frames=sum(scene.duration_frames for scene in scenes),
            quality_report=quality_report,
            visual_flow=visual_flow,
            palette=palette,
            hierarchy_issues=_scene_issues(validate_video_hierarchy(scenes)),
            tempo_issues=_scene_issues(validate_video_tempo(scenes, style, self.tables)),
            palette_issues=validate_palette_consistency(scenes, palette),
            breathing_issues=validate_video_breathing(scenes),
            parse_issues=parsed.issues,
            video_issues=video_assessment.global_issues,
        )
        tracker.complete_phase()

        tracker.complete()
        if self.verbose:
            console.print(
                f"[green]Generated {len(scenes)} scenes, "
                f"{result.total_duration_frames} frames ({style.value})[/green]"
            )
        return result

    def _create_beats(self, scenes: list[Scene], style: VideoStyle, tracker: ProgressTracker) -> list[Scene]:
        """Schedule beats, fit scenes to their tempo and enforce hierarchy."""
        total = len(scenes)
        enhanced = []
        for index, scene in enumerate(scenes):
            scene = scene.model_copy(update={"beats": enhance_beats(scene.beats, style, self.tables)})
            enhanced.append(fit_scene_to_beats(scene))
            tracker.update_progress(
                round((index + 1) / total * 60),
                f"Timing beats for scene {index + 1}/{total}",
                current_scene=index + 1,
                total_scenes=total,
            )

        adjusted, adjustments = adjust_video_tempo(enhanced, style, self.tables)
        if self.verbose:
            for adjustment in adjustments:
                console.print(f"[dim]  tempo: {adjustment}[/dim]")
        adjusted = [fit_scene_to_beats(scene) for scene in adjusted]

        balanced, fixes = auto_fix_video_hierarchy(adjusted, style)
        if self.verbose and fixes:
            console.print(f"[dim]  hierarchy: {fixes} fix(es) applied[/dim]")
        tracker.update_progress(80, "Balancing visual hierarchy")
        return [fit_scene_to_beats(scene) for scene in balanced]

    def _validate_quality(
        self,
        scenes: list[Scene],
        style: VideoStyle,
        tracker: ProgressTracker,
    ) -> tuple[list[Scene], QualityReport]:
        """Judge every scene, repairing failing ones once."""
        total = len(scenes)
        validated: list[Scene] = []
        invalid: list[int] = []
        warnings: list[str] = []

        for index, scene in enumerate(scenes):
            assessment = assess_scene(scene, index, style)
            if assessment.issues and self.config.brain.auto_fix:
                scene, applied = auto_fix_scene(scene, style)
                if applied:
                    scene = fit_scene_to_beats(scene)
                    assessment = assess_scene(scene, index, style)

            if not assessment.passed:
                invalid.append(index)
            if assessment.issues:
                warnings.append(f"Scene {index} ({scene.scene_type.value}): {', '.join(assessment.issues)}")

            validated.append(scene.model_copy(update={"quality_validated": assessment.passed}))
            tracker.update_progress(
                round((index + 1) / total * 100),
                f"Validated scene {index + 1}/{total}",
                current_scene=index + 1,
                total_scenes=total,
            )

        report = QualityReport(all_scenes_valid=not invalid, invalid_scenes=invalid, warnings=warnings)
        return validated, report


async def generate_video(
    request: GenerationRequest,
    config: Optional[Config] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> GenerationResult:
    """Convenience wrapper: build a VideoBrain and run one request."""
    brain = VideoBrain(config=config, progress_callback=progress_callback)
    return await brain.generate(request)
