# src/clip_aggregator/logic.py
import functools
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Set, Tuple, Union

import pathspec

from .models import ExclusionRules

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


# --- 예외 ---
class ClipAggregatorError(Exception):
    """clip_aggregator 에서 발생하는 모든 오류의 기본 클래스"""


class TraversalError(ClipAggregatorError):
    """디렉토리 목록을 읽을 수 없을 때 발생"""


class FileReadError(ClipAggregatorError):
    """파일을 열거나 읽을 수 없을 때 발생"""


# --- 고정 제외 규칙 ---
# 프로세스 전체에서 한 번만 만들어지는 읽기 전용 상수
EXCLUSION_RULES = ExclusionRules(
    names=frozenset({
        ".git",
        ".venv",
        "node_modules",
        ".idea",
        ".vscode",
        "target",
        "resources",
    }),
    extensions=frozenset({
        ".class",
        ".tokens",
        ".interp",
        ".mdb",
        ".csv",
        ".xml",
        ".ttf",
        ".mp3",
    }),
)


@functools.lru_cache(maxsize=None)
def _compile_rules(rules: ExclusionRules) -> pathspec.GitIgnoreSpec:
    """제외 규칙을 항목 이름 하나에 대해 매칭하는 PathSpec 으로 변환합니다."""
    # 이름은 그대로, 확장자는 '*<ext>' 패턴으로. 사용자 glob 은 받지 않음
    patterns = sorted(rules.names)
    patterns.extend(f"*{ext}" for ext in sorted(rules.extensions))
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def is_excluded(name: str, rules: ExclusionRules = EXCLUSION_RULES) -> bool:
    """
    디렉토리 항목 이름이 제외 대상이면 True 를 반환합니다.
    이름 완전 일치 또는 확장자 접미사 일치 (대소문자 구분).
    """
    return _compile_rules(rules).match_file(name)


# --- 디렉토리 순회 ---
def _list_dir(directory: Path) -> List[os.DirEntry]:
    # scandir 핸들은 with 블록을 벗어나면 항상 닫힘
    try:
        with os.scandir(directory) as entries:
            return list(entries)
    except OSError as e:
        raise TraversalError(f"Could not read directory '{directory}': {e}") from e


def _dir_key(directory: Path) -> Tuple[int, int]:
    try:
        st = os.stat(directory)
    except OSError as e:
        raise TraversalError(f"Could not stat directory '{directory}': {e}") from e
    return st.st_dev, st.st_ino


def walk(root: PathLike, rules: ExclusionRules = EXCLUSION_RULES) -> List[Path]:
    """
    root 아래의 파일을 깊이 우선(전위) 순서로 찾아 절대 경로 리스트로 반환합니다.
    순서는 디렉토리를 읽은 순서 그대로이며 정렬하지 않습니다.

    재귀 대신 명시적인 작업 스택을 사용하므로 깊은 트리에서도 재귀 한도에 걸리지 않습니다.
    현재 경로 위의 디렉토리로 다시 들어가는 심볼릭 링크(순환)는 건너뜁니다.
    """
    root_path = Path(os.path.abspath(root))
    files: List[Path] = []

    root_key = _dir_key(root_path)
    stack: List[Tuple[Tuple[int, int], Iterator[os.DirEntry]]] = [
        (root_key, iter(_list_dir(root_path)))
    ]
    active: Set[Tuple[int, int]] = {root_key}

    while stack:
        key, entries = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            active.discard(key)
            continue

        if is_excluded(entry.name, rules):
            logger.debug(f"Excluded: {entry.path}")
            continue

        path = Path(entry.path)
        # is_dir / is_file 은 심볼릭 링크를 따라감. 깨진 링크는 둘 다 False
        if entry.is_dir():
            child_key = _dir_key(path)
            if child_key in active:
                logger.warning(f"Skipping directory cycle at {path}")
                continue
            active.add(child_key)
            stack.append((child_key, iter(_list_dir(path))))
        elif entry.is_file():
            files.append(path)
        else:
            logger.debug(f"Ignoring non-regular entry: {path}")

    return files


# --- 경로 해석 및 파일 목록 병합 ---
def resolve_root_paths(raw_paths: Iterable[str], base_dir: PathLike) -> List[Path]:
    """사용자 인자를 base_dir 기준 절대 경로로 변환합니다. 절대 경로는 그대로 유지됩니다."""
    return [Path(os.path.abspath(os.path.join(base_dir, raw))) for raw in raw_paths]


def collect_files(root_paths: Iterable[PathLike], rules: ExclusionRules = EXCLUSION_RULES) -> List[Path]:
    """
    여러 루트 경로의 파일을 하나의 목록으로 합칩니다.
    - 존재하지 않는 경로는 조용히 건너뜀
    - 디렉토리는 walk() 로 순회
    - 파일 인자는 제외 규칙 없이 그대로 추가
    결과는 절대 경로 기준으로 중복을 제거하고 처음 나온 순서를 유지합니다.
    """
    collected: List[Path] = []
    for raw in root_paths:
        path = Path(os.path.abspath(raw))
        if not path.exists():
            logger.debug(f"Path does not exist, skipping: {path}")
            continue
        if path.is_dir():
            collected.extend(walk(path, rules))
        elif path.is_file():
            collected.append(path)

    # dict 는 삽입 순서를 유지하므로 순서 보존 중복 제거에 사용
    return list(dict.fromkeys(collected))


# --- 내용 취합 ---
def read_file_text(path: PathLike) -> str:
    # newline='' 로 원본 줄바꿈을 그대로 유지. 바이너리는 검증 없이 U+FFFD 로 치환
    try:
        with open(path, 'r', encoding='utf-8', errors='replace', newline='') as f:
            return f.read()
    except OSError as e:
        raise FileReadError(f"Could not read file '{path}': {e}") from e


def aggregate_files(files: Sequence[PathLike]) -> str:
    """
    파일 목록 순서대로 내용을 읽어 'File: <경로>' 헤더와 함께 하나의 문자열로 합칩니다.
    하나라도 읽지 못하면 FileReadError 가 발생하고 부분 결과는 반환하지 않습니다.
    """
    aggregated_content = []
    for file_path in files:
        content = read_file_text(file_path)
        aggregated_content.append(f"File: {file_path}\n{content}\n\n")
    return "".join(aggregated_content)
