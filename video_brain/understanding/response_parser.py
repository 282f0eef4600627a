"""Recover and structure the JSON video plan returned by the LLM."""

import json
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ..models import EntryAnimation, GenerationRequest, HoldAnimation, Scene
from .llm_provider import VideoBrainError

FENCE_PATTERN = re.compile(r"^\s*```(?:json)?\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL | re.IGNORECASE)


class ParseError(VideoBrainError):
    """The response holds no recoverable JSON object."""

    pass


class StructuralError(VideoBrainError):
    """The JSON parsed but required structure is missing or malformed."""

    pass


@dataclass
class ParsedVideo:
    """Structured content of a generation response, before enhancement."""

    scenes: list[Scene]
    concept: str = ""
    emotional_arc: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json fence, if any."""
    match = FENCE_PATTERN.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def extract_json(text: str) -> dict[str, Any]:
    """Parse the JSON object held in an LLM response.

    Tries the fence-stripped text first, then the span from the first
    ``{`` to the last ``}``.

    Raises:
        ParseError: If neither attempt yields JSON.
        StructuralError: If the JSON is not an object.
    """
    body = strip_code_fence(text)
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        start, end = body.find("{"), body.rfind("}")
        if start == -1 or end <= start:
            raise ParseError("Response contains no JSON object")
        try:
            data = json.loads(body[start : end + 1])
        except json.JSONDecodeError as e:
            raise ParseError(f"Response JSON could not be parsed: {e}") from e

    if not isinstance(data, dict):
        raise StructuralError(f"Expected a JSON object, got {type(data).__name__}")
    return data


ANIMATION_FIELDS = {
    "entry": frozenset(a.value for a in EntryAnimation),
    "hold": frozenset(a.value for a in HoldAnimation),
}


def _drop_unknown_animations(beat: dict[str, Any], label: str, issues: list[str]) -> dict[str, Any]:
    """Clear animation names outside the known set so beat defaults apply."""
    animation = beat.get("animation")
    if not isinstance(animation, dict):
        return beat

    cleaned = dict(animation)
    for key, known in ANIMATION_FIELDS.items():
        value = cleaned.get(key)
        if value is not None and value not in known:
            cleaned[key] = None
            issues.append(f"{label}: unknown {key} animation {value!r} ignored")
    return {**beat, "animation": cleaned}


def _normalize_scene(
    raw: dict[str, Any],
    index: int,
    image_kinds: dict[str, str],
    issues: list[str],
) -> dict[str, Any]:
    scene = dict(raw)
    scene.setdefault("sceneId", f"scene_{index + 1}")

    beats = []
    for j, beat in enumerate(scene.get("beats") or []):
        if isinstance(beat, dict):
            if not beat.get("beatId"):
                beat = {**beat, "beatId": f"beat_{j + 1}"}
            beat = _drop_unknown_animations(beat, f"Scene {index} beat {beat['beatId']}", issues)
        beats.append(beat)
    scene["beats"] = beats

    images = []
    for image in scene.get("images") or []:
        if isinstance(image, dict) and "kind" not in image and image.get("imageId") in image_kinds:
            image = {**image, "kind": image_kinds[image["imageId"]]}
        images.append(image)
    scene["images"] = images

    return scene


def parse_video_response(data: dict[str, Any], request: GenerationRequest) -> ParsedVideo:
    """Validate the scene list of a parsed response.

    Missing scene and beat ids are filled in by position, and scene images
    inherit the kind of the matching request image. Unknown entry or hold
    animation names are cleared, leaving the beat-type defaults to fill them
    in, and each one is recorded in the returned issues.

    Raises:
        StructuralError: If scenes are missing, empty or malformed.
    """
    raw_scenes = data.get("scenes")
    if not isinstance(raw_scenes, list) or not raw_scenes:
        raise StructuralError("Response contains no scenes")

    image_kinds = {image.id: image.kind.value for image in request.images}
    scenes: list[Scene] = []
    issues: list[str] = []
    for index, raw in enumerate(raw_scenes):
        if not isinstance(raw, dict):
            raise StructuralError(f"Scene {index} is not an object")
        try:
            scenes.append(Scene.model_validate(_normalize_scene(raw, index, image_kinds, issues)))
        except ValidationError as e:
            raise StructuralError(f"Scene {index} is malformed: {e}") from e

    arc = data.get("emotionalArc") or data.get("emotional_arc") or []
    return ParsedVideo(
        scenes=scenes,
        concept=str(data.get("concept") or ""),
        emotional_arc=[str(stop) for stop in arc] if isinstance(arc, list) else [],
        issues=issues,
    )


def parse_llm_response(text: str, request: GenerationRequest) -> ParsedVideo:
    """Recover JSON from raw LLM text and structure it into scenes."""
    return parse_video_response(extract_json(text), request)
