"""
Time-based media checks.

Captions, audio description, transcripts, audio control, animation,
flashing thresholds and sign language.
"""

from __future__ import annotations

from typing import List, Optional

from .models import FAIL, INFO, InputModel, PASS, WARNING, Verdict, fmt_num, join_present, verdict

AUTOPLAY_THRESHOLD_S = 3
ANIMATION_THRESHOLD_S = 5
DEFAULT_ANIMATION_DURATION_S = 6   # unknown duration is treated as over the threshold
MAX_FLASHES_PER_SECOND = 3
LARGE_FLASH_AREA_PERCENT = 25


class CaptionInput(InputModel):
    media_type: str
    is_live: bool
    has_captions: bool
    are_synchronized: Optional[bool] = None
    has_speaker_identification: Optional[bool] = None
    includes_non_speech_audio: Optional[bool] = None
    caption_type: Optional[str] = None  # open | closed


class AudioDescriptionInput(InputModel):
    has_video_content: bool
    is_prerecorded: bool
    has_audio_description: bool
    has_extended_description: Optional[bool] = None
    pauses_are_sufficient: Optional[bool] = None
    has_media_alternative: Optional[bool] = None


class TranscriptInput(InputModel):
    media_type: str
    has_transcript: bool
    is_synchronized: Optional[bool] = None
    includes_visual_descriptions: Optional[bool] = None
    is_accessible: Optional[bool] = None


class MediaControlInput(InputModel):
    autoplays: bool
    autoplay_duration: Optional[float] = None
    can_pause: Optional[bool] = None
    can_stop: Optional[bool] = None
    has_volume_control: Optional[bool] = None
    can_mute: Optional[bool] = None


class AnimationInput(InputModel):
    has_auto_animation: bool
    duration: Optional[float] = None
    can_pause: Optional[bool] = None
    can_stop: Optional[bool] = None
    can_hide: Optional[bool] = None
    is_essential: Optional[bool] = None


class FlashingInput(InputModel):
    has_flashing: bool
    flashes_per_second: Optional[float] = None
    flash_area_percent: Optional[float] = None
    is_below_threshold: Optional[bool] = None


class SignLanguageInput(InputModel):
    has_audio_content: bool
    is_prerecorded: bool
    has_sign_language: bool


# ---------------------------------------------------------------------------
# Captions (WCAG 1.2.2 / 1.2.4)
# ---------------------------------------------------------------------------


def check_captions(data: CaptionInput) -> List[Verdict]:
    if data.media_type == "video":
        return [
            verdict("1.2.2", INFO, "Video-only content without audio does not require captions")
        ]

    has = data.has_captions
    if data.is_live:
        return [
            verdict(
                "1.2.4",
                PASS if has else FAIL,
                "Live captions are provided" if has else "Live media lacks captions",
                value=has,
                recommendation=None if has else "Provide real-time captions for live audio content",
            )
        ]

    results = [
        verdict(
            "1.2.2",
            PASS if has else FAIL,
            "Captions are provided for prerecorded media" if has else "Prerecorded media lacks captions",
            value=has,
            recommendation=(
                None if has else "Provide synchronized captions for all prerecorded audio content"
            ),
        )
    ]

    if has:
        if data.are_synchronized is False:
            results.append(
                verdict(
                    "1.2.2",
                    WARNING,
                    "Captions may not be properly synchronized",
                    recommendation="Ensure captions are synchronized with the audio",
                )
            )
        if data.includes_non_speech_audio is False:
            results.append(
                verdict(
                    "1.2.2",
                    WARNING,
                    "Captions may not include non-speech audio (sound effects, music)",
                    recommendation="Include descriptions of relevant sound effects and music in captions",
                )
            )

    return results


# ---------------------------------------------------------------------------
# Audio description (WCAG 1.2.3 / 1.2.5 / 1.2.7)
# ---------------------------------------------------------------------------


def check_audio_description(data: AudioDescriptionInput) -> List[Verdict]:
    if not data.has_video_content:
        return [verdict("1.2.5", INFO, "Audio description only applies to video content")]
    if not data.is_prerecorded:
        return [verdict("1.2.5", INFO, "Audio description requirement applies to prerecorded content")]

    alternatives = join_present(
        data.has_audio_description and "audio description",
        data.has_media_alternative and "media alternative/transcript",
    )
    has_alt = bool(alternatives)
    results = [
        verdict(
            "1.2.3",
            PASS if has_alt else FAIL,
            (
                f"Alternative provided: {alternatives}"
                if has_alt
                else "No audio description or media alternative provided"
            ),
            value=has_alt,
            recommendation=(
                None
                if has_alt
                else "Provide audio description or full text alternative for video content"
            ),
        )
    ]

    described = data.has_audio_description
    results.append(
        verdict(
            "1.2.5",
            PASS if described else FAIL,
            "Audio description is provided" if described else "Audio description is not provided",
            value=described,
            recommendation=(
                None
                if described
                else "Provide audio description for visual information not available from audio track"
            ),
        )
    )

    if data.pauses_are_sufficient is False:
        extended = bool(data.has_extended_description)
        results.append(
            verdict(
                "1.2.7",
                PASS if extended else WARNING,
                (
                    "Extended audio description is provided where pauses are insufficient"
                    if extended
                    else "Pauses may be insufficient for audio description; "
                    "consider extended description"
                ),
                value=data.has_extended_description,
                recommendation=(
                    None
                    if extended
                    else "Provide extended audio description that pauses video for additional description"
                ),
            )
        )

    return results


# ---------------------------------------------------------------------------
# Transcripts (WCAG 1.2.1 / 1.2.8)
# ---------------------------------------------------------------------------


def check_transcript(data: TranscriptInput) -> List[Verdict]:
    has = data.has_transcript

    if data.media_type == "audio":
        return [
            verdict(
                "1.2.1",
                PASS if has else FAIL,
                (
                    "Transcript provided for audio-only content"
                    if has
                    else "Audio-only content lacks transcript"
                ),
                value=has,
                recommendation=None if has else "Provide a text transcript for audio-only content",
            )
        ]

    if data.media_type == "video":
        return [
            verdict(
                "1.2.1",
                PASS if has else FAIL,
                (
                    "Alternative provided for video-only content"
                    if has
                    else "Video-only content lacks text alternative or audio track"
                ),
                value=has,
                recommendation=(
                    None if has else "Provide text alternative or audio track describing video content"
                ),
            )
        ]

    if data.media_type == "audio-video":
        full = bool(has and data.includes_visual_descriptions)
        return [
            verdict(
                "1.2.8",
                PASS if full else WARNING,
                (
                    "Full media alternative (transcript with visual descriptions) is provided"
                    if full
                    else "Consider providing complete text alternative including visual descriptions"
                ),
                value=full,
                recommendation=(
                    None if full else "Provide transcript that includes all audio and visual information"
                ),
            )
        ]

    return []


# ---------------------------------------------------------------------------
# Audio control (WCAG 1.4.2)
# ---------------------------------------------------------------------------


def check_media_controls(data: MediaControlInput) -> List[Verdict]:
    if not data.autoplays:
        return [verdict("1.4.2", PASS, "Media does not autoplay")]

    if (data.autoplay_duration or 0) <= AUTOPLAY_THRESHOLD_S:
        return [verdict("1.4.2", PASS, "Autoplay duration is 3 seconds or less")]

    controls = join_present(
        data.can_pause and "pause",
        data.can_stop and "stop",
        data.can_mute and "mute",
        data.has_volume_control and "volume control",
    )
    ok = bool(controls)
    return [
        verdict(
            "1.4.2",
            PASS if ok else FAIL,
            (
                f"Audio control available: {controls}"
                if ok
                else "Auto-playing audio lacks mechanism to pause, stop, or control volume"
            ),
            value=ok,
            recommendation=(
                None
                if ok
                else "Provide mechanism to pause, stop, or control audio volume "
                "independent of system volume"
            ),
        )
    ]


# ---------------------------------------------------------------------------
# Animation (WCAG 2.2.2 / 2.3.3)
# ---------------------------------------------------------------------------


def check_animation(data: AnimationInput) -> List[Verdict]:
    if not data.has_auto_animation:
        return [verdict("2.2.2", PASS, "No auto-playing animation detected")]

    if data.is_essential:
        return [verdict("2.2.2", PASS, "Animation is essential to the content")]

    duration = DEFAULT_ANIMATION_DURATION_S if data.duration is None else data.duration
    if duration <= ANIMATION_THRESHOLD_S:
        return [verdict("2.2.2", PASS, "Animation duration is 5 seconds or less")]

    controls = join_present(
        data.can_pause and "pause",
        data.can_stop and "stop",
        data.can_hide and "hide",
    )
    ok = bool(controls)
    can_disable = bool(data.can_pause or data.can_stop)
    return [
        verdict(
            "2.2.2",
            PASS if ok else FAIL,
            (
                f"Animation control available: {controls}"
                if ok
                else "Auto-playing animation lacks mechanism to pause, stop, or hide"
            ),
            value=ok,
            recommendation=(
                None
                if ok
                else "Provide mechanism to pause, stop, or hide moving, blinking, or scrolling content"
            ),
        ),
        verdict(
            "2.3.3",
            PASS if can_disable else WARNING,
            (
                "Motion animation can be disabled"
                if can_disable
                else "Consider allowing users to disable motion animation "
                "(respects prefers-reduced-motion)"
            ),
            recommendation=(
                None
                if can_disable
                else "Honor prefers-reduced-motion media query and provide option to disable animation"
            ),
        ),
    ]


# ---------------------------------------------------------------------------
# Flashing (WCAG 2.3.1 / 2.3.2)
# ---------------------------------------------------------------------------


def check_flashing(data: FlashingInput) -> List[Verdict]:
    if not data.has_flashing:
        return [verdict("2.3.1", PASS, "No flashing content detected")]

    rate = data.flashes_per_second or 0
    safe = rate <= MAX_FLASHES_PER_SECOND or bool(data.is_below_threshold)
    results = [
        verdict(
            "2.3.1",
            PASS if safe else FAIL,
            (
                f"Flashing content is safe ({fmt_num(rate)} flashes/sec or below threshold)"
                if safe
                else f"Content flashes {fmt_num(rate)} times per second, exceeding safe threshold"
            ),
            value=rate,
            required=MAX_FLASHES_PER_SECOND,
            recommendation=(
                None
                if safe
                else "Reduce flash frequency to 3 or fewer per second, "
                "or ensure flashes are below general flash threshold"
            ),
        )
    ]

    no_flashing = rate == 0
    results.append(
        verdict(
            "2.3.2",
            PASS if no_flashing else WARNING,
            (
                "Content does not flash (meets AAA)"
                if no_flashing
                else f"Content flashes {fmt_num(rate)} times per second - consider removing for AAA"
            ),
            value=rate,
            recommendation=None if no_flashing else "For AAA compliance, avoid any flashing content",
        )
    )

    area = data.flash_area_percent
    if area is not None and area > LARGE_FLASH_AREA_PERCENT:
        results.append(
            verdict(
                "2.3.1",
                WARNING,
                f"Flashing area ({fmt_num(area)}% of viewport) is large",
                value=area,
                recommendation="Large flashing areas increase seizure risk; minimize flashing area size",
            )
        )

    return results


# ---------------------------------------------------------------------------
# Sign language (WCAG 1.2.6)
# ---------------------------------------------------------------------------


def check_sign_language(data: SignLanguageInput) -> List[Verdict]:
    if not data.has_audio_content or not data.is_prerecorded:
        return []

    has = data.has_sign_language
    return [
        verdict(
            "1.2.6",
            PASS if has else WARNING,
            (
                "Sign language interpretation is provided"
                if has
                else "Consider providing sign language interpretation for deaf users"
            ),
            value=has,
            recommendation=(
                None if has else "Provide sign language interpretation for all prerecorded audio content"
            ),
        )
    ]
