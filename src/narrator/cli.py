"""
Command-line interface for the narration pipeline.
"""

import argparse
import json
import logging
import os
import pathlib
from dataclasses import replace

import boto3
from dotenv import load_dotenv
from openai import OpenAI

from .ass_utils import generate_subtitles
from .config import Settings
from .models import CueStyle
from .pipeline import NarrationPipeline
from .storage import S3Storage
from .summarize import make_summarizer
from .tts import make_synth_openai, make_synth_polly

logger = logging.getLogger("narrator")


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Summarize text and narrate it over a subtitled video")

    # Input text
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--text", default=None, help="Text passage to summarize and narrate")
    src.add_argument("--text-file", default=None, help="Read the text passage from a file")

    # IO
    ap.add_argument("--video", default=None, help="Source video (default: $NARRATOR_SOURCE_VIDEO)")
    ap.add_argument("--workdir", default=None, help="Where local artifacts are written")
    ap.add_argument(
        "--keep-intermediates",
        action="store_true",
        help="Keep the local audio and subtitle files after the upload",
    )

    # Providers
    ap.add_argument("--summarizer", choices=["huggingface", "openai"], default="huggingface")
    ap.add_argument("--tts-provider", choices=["polly", "openai"], default="polly")
    ap.add_argument("--voice", default=None, help="Polly VoiceId or OpenAI voice name")

    # Subtitles only
    ap.add_argument(
        "--only-subs",
        action="store_true",
        help="Render subtitles from a saved transcript JSON and exit (no cloud calls)",
    )
    ap.add_argument("--transcript-json", default=None, help="Transcription result JSON")
    ap.add_argument("--subs-path", default=None, help="Output .ass path for --only-subs")

    # Subtitle style
    ap.add_argument("--font-family", default=None)
    ap.add_argument("--font-size", type=int, default=None)
    ap.add_argument("--primary-color", default=None, help="&HAABBGGRR, e.g. &H00FFFFFF")
    ap.add_argument("--alignment", type=int, default=None, help="Numpad-style alignment (1-9)")
    ap.add_argument("--margin-vertical", type=int, default=None)

    # Logging
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return ap


def style_from_args(args: argparse.Namespace) -> CueStyle:
    """Default style with any --font-*/--alignment/--margin-* overrides applied."""
    overrides = {
        "font_family": args.font_family,
        "font_size": args.font_size,
        "primary_color": args.primary_color,
        "alignment": args.alignment,
        "margin_vertical": args.margin_vertical,
    }
    return replace(CueStyle(), **{k: v for k, v in overrides.items() if v is not None})


def read_text(args: argparse.Namespace) -> str:
    if args.text_file:
        with open(args.text_file, encoding="utf-8") as f:
            return f.read()
    return args.text or ""


def build_pipeline(args: argparse.Namespace, settings: Settings) -> NarrationPipeline:
    """Wire real AWS/OpenAI/Hugging Face clients into a pipeline."""
    client = None
    if args.summarizer == "openai" or args.tts_provider == "openai":
        if not settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY is not set. Put it in .env or environment.")
        client = OpenAI(api_key=settings.openai_api_key)

    if args.summarizer == "openai":
        summarize = make_summarizer("openai", client=client, model=settings.openai_summary_model)
    else:
        summarize = make_summarizer(
            "huggingface", api_key=settings.huggingface_api_key, model=settings.summary_model
        )

    if args.tts_provider == "openai":
        synth = make_synth_openai(
            client, settings.openai_tts_model, args.voice or settings.openai_voice
        )
    else:
        polly = boto3.client("polly", region_name=settings.aws_region)
        synth = make_synth_polly(polly, args.voice or settings.voice_id)

    return NarrationPipeline(
        settings,
        summarize=summarize,
        synth=synth,
        audio_storage=S3Storage(settings.audio_bucket, region_name=settings.aws_region),
        video_storage=S3Storage(settings.video_bucket, region_name=settings.aws_region),
        transcribe_client=boto3.client("transcribe", region_name=settings.aws_region),
        style=style_from_args(args),
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    project_root = pathlib.Path(__file__).parent.parent.parent
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()

    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    settings = Settings.from_env()
    if args.video:
        settings.source_video = args.video
    if args.workdir:
        settings.workdir = args.workdir

    if args.only_subs:
        if not args.transcript_json:
            raise RuntimeError("--transcript-json is required when --only-subs is set")
        with open(args.transcript_json, encoding="utf-8") as f:
            transcript = json.load(f)
        subs_path = args.subs_path or os.path.join(settings.workdir, "subtitles.ass")
        cues = generate_subtitles(transcript, subs_path, style_from_args(args))
        logger.info(f"Done ({len(cues)} cues -> {subs_path})")
        return

    content = read_text(args)
    result = build_pipeline(args, settings).run(
        content, keep_intermediates=args.keep_intermediates
    )
    logger.info("Process completed successfully")
    print(
        json.dumps(
            {
                "message": "Process completed successfully",
                "audioUrl": result.audio_url,
                "videoUrl": result.video_url,
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
