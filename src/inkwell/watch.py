"""Live preview: re-render a Markdown file to HTML whenever it changes."""

import json
import signal
import time
from pathlib import Path
from typing import Any, Callable

import structlog
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

log = structlog.get_logger()


class DebounceHandler(FileSystemEventHandler):
    """Collapse bursts of change events on one file into a single callback."""

    def __init__(self, target: Path, on_change: Callable[[], None], debounce_ms: int = 150):
        super().__init__()
        self.target = target.resolve()
        self.on_change = on_change
        self.debounce_ms = debounce_ms

        self.pending = False
        self.last_event_time = 0.0

    def _is_target(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        return any(p and Path(str(p)).resolve() == self.target for p in paths)

    def _touch(self, event: FileSystemEvent) -> None:
        if self._is_target(event):
            self.pending = True
            self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        self._touch(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._touch(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save via rename-into-place
        self._touch(event)

    def check_and_flush(self) -> None:
        """Flush if the debounce period has elapsed since the last event."""
        if not self.pending:
            return
        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        if not self.pending:
            return
        self.pending = False
        self.on_change()


def render_preview_file(runtime: Any, source: Path, out: Path) -> dict[str, Any]:
    """Render `source` to an HTML file at `out`; returns the preview summary."""
    text = source.read_text(encoding="utf-8")
    preview = runtime.preview(text)
    out.write_text(preview["html"] + "\n", encoding="utf-8")
    return {
        "source": str(source),
        "out": str(out),
        "headings": len(preview["headings"]),
        "blocks": len(preview["blocks"]),
        "reading_time": preview["reading_time"],
    }


def rebuild_preview(
    runtime: Any,
    source: Path,
    out: Path,
    quiet: bool = False,
    json_output: bool = False,
) -> bool:
    """
    Re-render one preview and report it.

    Read and decode failures are reported, not raised, so a bad save does not
    stop the watch loop. Returns True when the preview was written.
    """
    start_time = time.time()
    try:
        summary = render_preview_file(runtime, source, out)
    except (OSError, UnicodeDecodeError) as e:
        log.error("watch_render_failed", path=str(source), error=str(e))
        if json_output:
            print(json.dumps({"type": "error", "message": str(e)}), flush=True)
        return False

    summary["duration_ms"] = int((time.time() - start_time) * 1000)
    log.info("watch_rendered", **summary)
    if json_output:
        print(json.dumps({"type": "render", **summary}), flush=True)
    elif not quiet:
        print(
            f"Rendered {out} ({summary['blocks']} blocks, "
            f"{summary['headings']} headings, {summary['duration_ms']}ms)",
            flush=True,
        )
    return True


def watch_file(
    source: Path,
    out: Path,
    runtime: Any,
    debounce_ms: int = 150,
    quiet: bool = False,
    json_output: bool = False,
) -> int:
    """
    Watch a Markdown file and keep an HTML preview next to it up to date.

    Args:
        source: Markdown file to watch
        out: HTML file to (re)write
        runtime: Runtime instance
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress output
        json_output: Print JSON events instead of human-readable lines

    Returns:
        Exit code
    """
    if not source.is_file():
        log.error("watch_source_missing", path=str(source))
        return 1

    running = True

    def rebuild() -> None:
        rebuild_preview(runtime, source, out, quiet=quiet, json_output=json_output)

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    rebuild()

    handler = DebounceHandler(source, rebuild, debounce_ms)
    observer = Observer()
    # Watch the directory: many editors replace the file rather than write in place
    observer.schedule(handler, str(source.resolve().parent), recursive=False)

    if not quiet and not json_output:
        print(f"Watching {source} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()
    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    log.info("watch_stopped", path=str(source))
    return 0
