# src/clip_aggregator/logging_config.py
import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

import coloredlogs  # dictConfig 가 coloredlogs.ColoredFormatter 를 찾을 수 있도록 임포트
import yaml

PACKAGE_LOGGER = "clip_aggregator"

# 패키지 안에 함께 배포되는 설정 파일
CONFIG_PATH = Path(__file__).parent / 'logging_config.yaml'

config_logger = logging.getLogger(__name__)


def _fallback(message: str) -> None:
    print(f"Warning: {message} Using basicConfig.", file=sys.stderr)
    logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(name)s:%(message)s')


def setup_logging(level: Optional[str] = None, config_path: Path = CONFIG_PATH) -> None:
    """
    YAML 설정 파일을 읽어 로깅 시스템을 설정합니다.
    level 이 주어지면 패키지 로거의 레벨을 덮어씁니다.
    """
    # dictConfig 전에 coloredlogs 전역 설정을 먼저 초기화
    try:
        coloredlogs.install()
    except Exception as install_e:
        print(f"Warning: coloredlogs.install() failed during initial setup: {install_e}", file=sys.stderr)

    try:
        if config_path.is_file():
            with open(config_path, 'rt', encoding='utf-8') as f:
                config = yaml.safe_load(f.read())

            if config:
                logging.config.dictConfig(config)
                config_logger.debug(f"Logging setup complete from {config_path}")
            else:
                _fallback(f"Logging configuration file {config_path} is empty.")
        else:
            _fallback(f"Logging configuration file not found at {config_path}.")

    except yaml.YAMLError as yaml_e:
        _fallback(f"Could not parse logging configuration file {config_path}: {yaml_e}.")
    except (OSError, ValueError, TypeError) as e:
        _fallback(f"Could not load logging configuration from {config_path}: {e}.")

    if level:
        logging.getLogger(PACKAGE_LOGGER).setLevel(level.upper())
