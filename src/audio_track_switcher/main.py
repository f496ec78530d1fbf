"""CLI entrypoint for audio-track-switcher."""

from collections.abc import Iterable
from pathlib import Path

import rich_click as click

from audio_track_switcher import __version__
from audio_track_switcher.config import Settings
from audio_track_switcher.controllers import AudioTrackCliController, SwitchCommand, TracksCommand
from audio_track_switcher.worker import WorkerInvocationError

click.rich_click.USE_MARKDOWN = True
CONTROLLER = AudioTrackCliController()

_WORKER_OPTION_HELP = (
    "Worker executable. Defaults to AUDIO_TRACK_WORKER_PATH, "
    "then audio-track-backend next to the application."
)


@click.group()
@click.version_option(version=__version__, prog_name="audio-track-switcher")
@click.option(
    "--log-level",
    type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    default=None,
    help="Logging level. Defaults to AUDIO_TRACK_LOG_LEVEL or WARNING.",
)
@click.pass_context
def audio_track_switcher(ctx: click.Context, log_level: str | None) -> None:
    """Inspect and switch default audio tracks through the media worker."""

    settings = Settings.from_env()
    if log_level is not None:
        settings.log_level = log_level.upper()
    try:
        settings.validate()
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    settings.configure_logging()
    ctx.obj = settings


@audio_track_switcher.command("tracks")
@click.argument("video_path", type=click.Path(path_type=Path))
@click.option(
    "--worker",
    "worker_path",
    type=click.Path(path_type=Path),
    default=None,
    help=_WORKER_OPTION_HELP,
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the raw video info JSON.",
)
@click.pass_obj
def tracks(settings: Settings, video_path: Path, worker_path: Path | None, as_json: bool) -> None:
    """List audio tracks of a video file."""

    try:
        _emit_lines(
            CONTROLLER.list_tracks(
                TracksCommand(
                    video_path=video_path,
                    worker_path=worker_path,
                    as_json=as_json,
                    settings=settings,
                ),
            ),
        )
    except WorkerInvocationError as error:
        raise click.ClickException(str(error)) from error


@audio_track_switcher.command("switch")
@click.argument("input_path", type=click.Path(path_type=Path))
@click.argument("track_index", type=click.IntRange(min=0))
@click.argument("output_path", type=click.Path(path_type=Path))
@click.option(
    "--worker",
    "worker_path",
    type=click.Path(path_type=Path),
    default=None,
    help=_WORKER_OPTION_HELP,
)
@click.pass_obj
def switch(
    settings: Settings,
    input_path: Path,
    track_index: int,
    output_path: Path,
    worker_path: Path | None,
) -> None:
    """Write OUTPUT_PATH with TRACK_INDEX as the default audio track, showing progress."""

    try:
        _emit_lines(
            CONTROLLER.switch_track(
                SwitchCommand(
                    input_path=input_path,
                    track_index=track_index,
                    output_path=output_path,
                    worker_path=worker_path,
                    settings=settings,
                ),
            ),
        )
    except WorkerInvocationError as error:
        raise click.ClickException(str(error)) from error


def _emit_lines(lines: Iterable[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    audio_track_switcher()
