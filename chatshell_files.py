import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath, PureWindowsPath

from chatshell_log import log_event

OPEN_MARKER = "<file:"
CLOSE_MARKER = "</file>"


@dataclass(frozen=True)
class FileDirective:
    path: str
    content: str


@dataclass(frozen=True)
class FileWritten:
    path: str


@dataclass(frozen=True)
class FileRejected:
    path: str
    reason: str


# --- Parsing ---
def find_directives(reply):
    """Yield every <file:path> ... </file> block in order of appearance.

    The path runs from the open marker to the next '>' on the same line and the
    body runs to the next close marker, so blocks never overlap. An opening
    marker without a close marker ends the scan.
    """
    pos = 0
    while True:
        start = reply.find(OPEN_MARKER, pos)
        if start == -1:
            return
        path_start = start + len(OPEN_MARKER)
        path_end = reply.find(">", path_start)
        if path_end == -1:
            return
        raw_path = reply[path_start:path_end]
        if "\n" in raw_path:
            pos = path_start
            continue
        body_start = path_end + 1
        body_end = reply.find(CLOSE_MARKER, body_start)
        if body_end == -1:
            log_event(f"unterminated file directive for {raw_path.strip()!r}")
            return
        yield FileDirective(path=raw_path.strip(), content=reply[body_start:body_end].strip())
        pos = body_end + len(CLOSE_MARKER)


# --- Validation ---
def unsafe_path_reason(path):
    """Return why a model-supplied path may not be written, or None if it may."""
    if not path:
        return "empty path"
    if path.startswith(("/", "\\")):
        return "absolute path"
    if PurePosixPath(path).is_absolute() or PureWindowsPath(path).anchor:
        return "absolute path"
    segments = path.replace("\\", "/").split("/")
    if ".." in segments:
        return "parent directory traversal"
    return None


# --- Writing ---
def _inside(base, target):
    root = base.resolve()
    resolved = target.resolve()
    return resolved == root or root in resolved.parents


def _write_file(target, content):
    # Encode first so an unencodable body never truncates an existing file.
    data = content.encode("utf-8")
    target.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    with os.fdopen(fd, "wb") as f:
        f.write(data)


def extract_and_write(reply, base_dir=None):
    """Write every safe file directive in ``reply`` below ``base_dir``.

    Returns a FileWritten or FileRejected per directive, in order. Unsafe paths
    and write errors are reported without stopping the remaining directives.
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    results = []
    for directive in find_directives(reply):
        reason = unsafe_path_reason(directive.path)
        if reason:
            log_event(f"blocked file directive {directive.path!r}: {reason}")
            results.append(FileRejected(directive.path, reason))
            continue
        target = base / directive.path
        try:
            if not _inside(base, target):
                log_event(f"blocked file directive {directive.path!r}: resolves outside {base}")
                results.append(FileRejected(directive.path, "outside working directory"))
                continue
            _write_file(target, directive.content)
        # ValueError covers NUL bytes in paths and unencodable bodies; RuntimeError
        # is a symlink loop in resolve() before Python 3.13.
        except (OSError, ValueError, RuntimeError) as e:
            log_event(f"error writing {directive.path!r}: {e}")
            results.append(FileRejected(directive.path, str(e)))
            continue
        log_event(f"wrote {directive.path!r} ({len(directive.content)} chars)")
        results.append(FileWritten(directive.path))
    return results
