"""Tests for time-based media checks."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from wcag_engine.media_checks import (
    AnimationInput,
    AudioDescriptionInput,
    CaptionInput,
    FlashingInput,
    MediaControlInput,
    SignLanguageInput,
    TranscriptInput,
    check_animation,
    check_audio_description,
    check_captions,
    check_flashing,
    check_media_controls,
    check_sign_language,
    check_transcript,
)


def _pairs(results):
    return [(r.criterion, r.status) for r in results]


def _audio_description(video, prerecorded, described, **extra):
    return AudioDescriptionInput(
        has_video_content=video, is_prerecorded=prerecorded, has_audio_description=described, **extra
    )


def _sign_language(audio, prerecorded, signed):
    return SignLanguageInput(has_audio_content=audio, is_prerecorded=prerecorded, has_sign_language=signed)


# ---------------------------------------------------------------------------
# Captions
# ---------------------------------------------------------------------------


class TestCaptions:
    def test_video_only_is_info(self):
        (r,) = check_captions(CaptionInput(media_type="video", is_live=False, has_captions=False))
        assert (r.criterion, r.status) == ("1.2.2", "info")

    def test_live_without_captions(self):
        results = check_captions(CaptionInput(media_type="audio-video", is_live=True, has_captions=False))
        assert _pairs(results) == [("1.2.4", "fail")]

    def test_live_with_captions(self):
        results = check_captions(CaptionInput(media_type="audio", is_live=True, has_captions=True))
        assert _pairs(results) == [("1.2.4", "pass")]

    def test_prerecorded_without_captions(self):
        results = check_captions(CaptionInput(media_type="audio-video", is_live=False, has_captions=False))
        assert _pairs(results) == [("1.2.2", "fail")]
        assert results[0].message == "Prerecorded media lacks captions"

    def test_caption_quality_warnings(self):
        results = check_captions(
            CaptionInput(
                media_type="audio-video",
                is_live=False,
                has_captions=True,
                are_synchronized=False,
                includes_non_speech_audio=False,
            )
        )
        assert _pairs(results) == [("1.2.2", "pass"), ("1.2.2", "warning"), ("1.2.2", "warning")]

    def test_unknown_quality_is_not_flagged(self):
        results = check_captions(CaptionInput(media_type="audio-video", is_live=False, has_captions=True))
        assert _pairs(results) == [("1.2.2", "pass")]


# ---------------------------------------------------------------------------
# Audio description
# ---------------------------------------------------------------------------


class TestAudioDescription:
    def test_no_video_is_info(self):
        (r,) = check_audio_description(_audio_description(False, True, False))
        assert r.status == "info"

    def test_live_video_is_info(self):
        (r,) = check_audio_description(_audio_description(True, False, False))
        assert r.status == "info"

    def test_nothing_provided(self):
        results = check_audio_description(_audio_description(True, True, False))
        assert _pairs(results) == [("1.2.3", "fail"), ("1.2.5", "fail")]

    def test_media_alternative_satisfies_level_a_only(self):
        results = check_audio_description(
            _audio_description(True, True, False, has_media_alternative=True)
        )
        assert _pairs(results) == [("1.2.3", "pass"), ("1.2.5", "fail")]
        assert results[0].message == "Alternative provided: media alternative/transcript"

    def test_insufficient_pauses(self):
        results = check_audio_description(
            _audio_description(True, True, True, pauses_are_sufficient=False)
        )
        assert _pairs(results)[-1] == ("1.2.7", "warning")

    def test_extended_description(self):
        results = check_audio_description(
            _audio_description(True, True, True, pauses_are_sufficient=False, has_extended_description=True)
        )
        assert _pairs(results) == [("1.2.3", "pass"), ("1.2.5", "pass"), ("1.2.7", "pass")]


# ---------------------------------------------------------------------------
# Transcripts
# ---------------------------------------------------------------------------


class TestTranscript:
    def test_audio_only(self):
        missing = TranscriptInput(media_type="audio", has_transcript=False)
        present = TranscriptInput(media_type="audio", has_transcript=True)
        assert _pairs(check_transcript(missing)) == [("1.2.1", "fail")]
        assert _pairs(check_transcript(present)) == [("1.2.1", "pass")]

    def test_video_only(self):
        (r,) = check_transcript(TranscriptInput(media_type="video", has_transcript=False))
        assert r.message == "Video-only content lacks text alternative or audio track"

    def test_audio_video_needs_visual_descriptions(self):
        plain = TranscriptInput(media_type="audio-video", has_transcript=True)
        described = TranscriptInput(
            media_type="audio-video", has_transcript=True, includes_visual_descriptions=True
        )
        assert _pairs(check_transcript(plain)) == [("1.2.8", "warning")]
        assert _pairs(check_transcript(described)) == [("1.2.8", "pass")]

    def test_unknown_media_type(self):
        assert check_transcript(TranscriptInput(media_type="podcast", has_transcript=True)) == []


# ---------------------------------------------------------------------------
# Audio control
# ---------------------------------------------------------------------------


class TestMediaControls:
    def test_no_autoplay(self):
        assert check_media_controls(MediaControlInput(autoplays=False))[0].status == "pass"

    def test_short_autoplay(self):
        (r,) = check_media_controls(MediaControlInput(autoplays=True, autoplay_duration=3))
        assert r.status == "pass"
        assert r.message == "Autoplay duration is 3 seconds or less"

    def test_unknown_duration_counts_as_short(self):
        (r,) = check_media_controls(MediaControlInput(autoplays=True))
        assert r.status == "pass"

    def test_long_autoplay_without_controls(self):
        (r,) = check_media_controls(MediaControlInput(autoplays=True, autoplay_duration=30))
        assert r.status == "fail"

    def test_long_autoplay_with_controls(self):
        (r,) = check_media_controls(
            MediaControlInput(autoplays=True, autoplay_duration=30, can_pause=True, has_volume_control=True)
        )
        assert r.status == "pass"
        assert r.message == "Audio control available: pause, volume control"


# ---------------------------------------------------------------------------
# Animation
# ---------------------------------------------------------------------------


class TestAnimation:
    def test_no_animation(self):
        assert _pairs(check_animation(AnimationInput(has_auto_animation=False))) == [("2.2.2", "pass")]

    def test_short_animation(self):
        assert _pairs(check_animation(AnimationInput(has_auto_animation=True, duration=5))) == [("2.2.2", "pass")]

    def test_unknown_duration_needs_controls(self):
        results = check_animation(AnimationInput(has_auto_animation=True))
        assert _pairs(results) == [("2.2.2", "fail"), ("2.3.3", "warning")]

    def test_hide_only_passes_level_a_but_not_motion(self):
        results = check_animation(AnimationInput(has_auto_animation=True, duration=10, can_hide=True))
        assert _pairs(results) == [("2.2.2", "pass"), ("2.3.3", "warning")]

    def test_pausable_animation(self):
        results = check_animation(AnimationInput(has_auto_animation=True, duration=10, can_pause=True))
        assert _pairs(results) == [("2.2.2", "pass"), ("2.3.3", "pass")]

    def test_essential_animation(self):
        results = check_animation(AnimationInput(has_auto_animation=True, duration=60, is_essential=True))
        assert _pairs(results) == [("2.2.2", "pass")]


# ---------------------------------------------------------------------------
# Flashing
# ---------------------------------------------------------------------------


class TestFlashing:
    def test_no_flashing(self):
        assert _pairs(check_flashing(FlashingInput(has_flashing=False))) == [("2.3.1", "pass")]

    def test_three_flashes_is_safe_but_not_aaa(self):
        results = check_flashing(FlashingInput(has_flashing=True, flashes_per_second=3))
        assert _pairs(results) == [("2.3.1", "pass"), ("2.3.2", "warning")]
        assert results[0].required == 3

    def test_too_many_flashes(self):
        results = check_flashing(FlashingInput(has_flashing=True, flashes_per_second=5))
        assert _pairs(results) == [("2.3.1", "fail"), ("2.3.2", "warning")]
        assert results[0].message == "Content flashes 5 times per second, exceeding safe threshold"

    def test_below_general_threshold(self):
        results = check_flashing(FlashingInput(has_flashing=True, flashes_per_second=5, is_below_threshold=True))
        assert results[0].status == "pass"

    def test_unknown_rate_counts_as_zero(self):
        results = check_flashing(FlashingInput(has_flashing=True))
        assert _pairs(results) == [("2.3.1", "pass"), ("2.3.2", "pass")]

    def test_large_flash_area(self):
        results = check_flashing(FlashingInput(has_flashing=True, flashes_per_second=2, flash_area_percent=40))
        assert _pairs(results)[-1] == ("2.3.1", "warning")
        assert results[-1].message == "Flashing area (40% of viewport) is large"

    def test_area_at_limit_is_not_flagged(self):
        results = check_flashing(FlashingInput(has_flashing=True, flashes_per_second=2, flash_area_percent=25))
        assert len(results) == 2


# ---------------------------------------------------------------------------
# Sign language
# ---------------------------------------------------------------------------


class TestSignLanguage:
    def test_out_of_scope(self):
        assert check_sign_language(_sign_language(False, True, False)) == []
        assert check_sign_language(_sign_language(True, False, False)) == []

    def test_missing_sign_language_warns(self):
        assert _pairs(check_sign_language(_sign_language(True, True, False))) == [("1.2.6", "warning")]

    def test_sign_language_provided(self):
        assert _pairs(check_sign_language(_sign_language(True, True, True))) == [("1.2.6", "pass")]


class TestFlashingBoundary:
    def test_four_flashes_fail_aa_and_warn_aaa(self):
        results = check_flashing(FlashingInput(has_flashing=True, flashes_per_second=4))
        assert _pairs(results) == [("2.3.1", "fail"), ("2.3.2", "warning")]
