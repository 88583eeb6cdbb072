# src/clip_aggregator/clipboard.py
import logging
import subprocess
import sys
from typing import Dict, Optional

from .models import ClipboardCommand, ClipboardResult

logger = logging.getLogger(__name__)


# --- 플랫폼별 클립보드 명령어 ---
CLIPBOARD_COMMANDS: Dict[str, ClipboardCommand] = {
    "darwin": ClipboardCommand(platform="darwin", argv=["pbcopy"]),
    "win32": ClipboardCommand(platform="win32", argv=["clip"]),
    "linux": ClipboardCommand(platform="linux", argv=["xclip", "-selection", "clipboard"]),
}

# 목록에 없는 플랫폼 (BSD 등 기타 유닉스 계열)
DEFAULT_CLIPBOARD_COMMAND = ClipboardCommand(platform="default", argv=["xsel", "--clipboard", "--input"])


def clipboard_command_for(platform: Optional[str] = None) -> ClipboardCommand:
    """sys.platform 값에 맞는 클립보드 명령어를 반환합니다."""
    if platform is None:
        platform = sys.platform
    return CLIPBOARD_COMMANDS.get(platform, DEFAULT_CLIPBOARD_COMMAND)


def send_to_clipboard(text: str, platform: Optional[str] = None) -> ClipboardResult:
    """
    텍스트를 시스템 클립보드 명령어의 표준 입력으로 전달합니다.
    실패해도 예외를 던지지 않고 ClipboardResult(ok=False) 로 진단 메시지를 돌려줍니다.
    """
    command = clipboard_command_for(platform)
    logger.debug(f"Using clipboard command: {' '.join(command.argv)}")

    try:
        # xclip 처럼 백그라운드로 남는 프로세스가 파이프를 붙잡지 않도록 출력은 버림
        subprocess.run(
            command.argv,
            input=text,
            encoding='utf-8',
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except FileNotFoundError:
        return ClipboardResult(
            ok=False,
            command=command.argv,
            error=f"Clipboard command '{command.argv[0]}' not found",
        )
    except subprocess.CalledProcessError as e:
        return ClipboardResult(
            ok=False,
            command=command.argv,
            error=f"Clipboard command '{' '.join(command.argv)}' exited with status {e.returncode}",
        )
    except (OSError, subprocess.SubprocessError) as e:
        return ClipboardResult(ok=False, command=command.argv, error=str(e))

    return ClipboardResult(ok=True, command=command.argv)
