import glob
import itertools
import json
import os
import tempfile
from typing import Any, Callable, Dict, Generator, List, Tuple, TypeVar

from errors import FileNotFound, FilesystemFailure, MalformedJSON

T = TypeVar('T')
K = TypeVar('K')


def read_json(path: str) -> Any:
    with open(path, encoding="utf-8") as json_file:
        return json.load(json_file)


def load_json_object(path: str) -> Dict[str, Any]:
    try:
        data = read_json(path)
    except FileNotFoundError:
        raise FileNotFound(f"Metadata file not found: {path}")
    except UnicodeDecodeError as e:
        raise MalformedJSON(f"{path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise MalformedJSON(f"{path} is not valid JSON: {e}") from e
    except OSError as e:
        raise FilesystemFailure(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise MalformedJSON(f"{path} must contain a JSON object, found {type(data).__name__}")
    return data


def dump_json(data: Any, sort_keys=False, indent=2) -> str:
    return json.dumps(data, sort_keys=sort_keys, indent=indent, ensure_ascii=False) + "\n"


def write_atomic(path: str, write: Callable[[Any], None], mode="w"):
    # Readers never observe a partially written file:
    directory = os.path.dirname(path) or "."
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=os.path.basename(path))
    except OSError as e:
        raise FilesystemFailure(f"Cannot write {path}: {e}") from e

    try:
        with os.fdopen(fd, mode, **({} if "b" in mode else {"encoding": "utf-8"})) as tmp_file:
            write(tmp_file)
        os.replace(tmp_path, path)
    except OSError as e:
        raise FilesystemFailure(f"Cannot write {path}: {e}") from e
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)


def write_json(data: Any, path: str, sort_keys=False, indent=2):
    content = dump_json(data, sort_keys=sort_keys, indent=indent)
    write_atomic(path, lambda f: f.write(content))


def multiread_json(base_dir: str, pattern: str) -> Generator[Tuple[str, str], None, None]:
    """Yield (key, path) for every file matching pattern, key being the path relative to base_dir without extension."""
    base_dir = os.path.join(base_dir, "")
    for target in sorted(glob.glob(glob.escape(base_dir) + pattern)):
        key = os.path.splitext(os.path.relpath(target, base_dir))[0].replace(os.sep, "/")
        yield key, target


def find_duplicates(items: List[T], key: Callable[[T], K]) -> List[Tuple[K, List[T]]]:
    groups = itertools.groupby(sorted(items, key=key), key)
    groups = [(k, list(items)) for k, items in groups]
    return [(k, items) for k, items in groups if len(items) > 1]
