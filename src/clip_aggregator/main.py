# src/clip_aggregator/main.py
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from .clipboard import send_to_clipboard
from .logging_config import setup_logging
from .logic import (
    ClipAggregatorError,
    aggregate_files,
    collect_files,
    resolve_root_paths,
)

try:
    from importlib.metadata import PackageNotFoundError, version
    __version__ = version("clip_aggregator")
except PackageNotFoundError:
    # 패키지가 설치되지 않은 상태 (소스 트리에서 직접 실행)
    __version__ = "0.1.0"  # pyproject.toml 과 맞출 것

logger = logging.getLogger(__name__)

# 상대 경로 인자는 호출 위치가 아니라 도구가 설치된 위치 기준으로 해석
TOOL_DIR = Path(__file__).resolve().parent

USAGE = "Usage: clagr <fileOrFolder1> <fileOrFolder2> ..."


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# --- Typer 앱 생성 및 기본 설정 ---
app = typer.Typer(
    name="clagr",
    help="Gathers files and folders into one text blob and copies it to the clipboard.",
    add_completion=False,
)


def version_callback(value: bool):
    if value:
        typer.echo(f"clagr version: {__version__}")
        raise typer.Exit()


def print_copied_summary(files: List[Path]) -> None:
    """클립보드 복사 성공 시 포함된 파일 목록과 개수를 출력합니다."""
    typer.secho("Source files copied to clipboard!", fg=typer.colors.GREEN)
    typer.echo("\nFiles copied:")
    for index, file_path in enumerate(files, start=1):
        typer.echo(f"  {index}. {file_path}")
    typer.echo(f"\nTotal: {len(files)} file(s)")


def print_fallback(text: str, diagnostic: Optional[str]) -> None:
    """클립보드를 쓸 수 없을 때 내용을 잃지 않도록 표준 출력으로 보여줍니다."""
    typer.secho(f"Error copying to clipboard: {diagnostic}", fg=typer.colors.RED)
    typer.echo("\n--- Content that would be copied ---")
    typer.echo(text, nl=False)


# --- 메인 명령어 ---
@app.command()
def run(
    paths: Annotated[Optional[List[str]], typer.Argument(
        help="Files or folders to gather. Relative paths are resolved against the tool's install directory.",
        show_default=False,
    )] = None,
    to_stdout: Annotated[bool, typer.Option(
        "--stdout", "-s",
        help="Print the aggregated text instead of copying it to the clipboard.",
    )] = False,
    log_level: Annotated[Optional[LogLevel], typer.Option(
        "--log-level", "-l",
        help="Log level for diagnostic messages.",
        case_sensitive=False,
    )] = None,
    version: Annotated[Optional[bool], typer.Option(
        "--version", "-v",
        help="Show the application's version and exit.",
        callback=version_callback,
        is_eager=True,
    )] = None,
):
    """
    Recursively collects the given files and folders, joins them with
    'File: <path>' headers and copies the result to the system clipboard.
    """
    # --- 1. 인자 확인 (순회 전에 종료) ---
    if not paths:
        typer.echo(USAGE)
        raise typer.Exit(code=1)

    setup_logging(log_level.value if log_level else None)

    exit_code = 0
    try:
        # --- 2. 경로 해석 및 파일 목록 생성 ---
        root_paths = resolve_root_paths(paths, TOOL_DIR)
        logger.debug(f"Resolved paths: {[str(p) for p in root_paths]}")
        files = collect_files(root_paths)

        if not files:
            typer.secho("Warning: No files found to aggregate.", fg=typer.colors.YELLOW)

        # --- 3. 내용 취합 (하나라도 실패하면 전체 중단) ---
        typer.echo("Processing files...")
        output = aggregate_files(files)

        # --- 4. 클립보드로 전송, 실패 시 표준 출력으로 대체 ---
        if to_stdout:
            typer.echo(output, nl=False)
        else:
            result = send_to_clipboard(output)
            if result.ok:
                print_copied_summary(files)
            else:
                logger.debug(f"Clipboard command {result.command} failed: {result.error}")
                print_fallback(output, result.error)

    except ClipAggregatorError as e:
        typer.secho(f"Error reading files: {e}", fg=typer.colors.RED)
        exit_code = 1
    except Exception as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED)
        logger.debug("Unexpected error during run", exc_info=True)
        exit_code = 1

    if exit_code:
        raise typer.Exit(code=exit_code)


if __name__ == "__main__":
    app()
