"""Spawning, output capture and termination shared by both invokers.

Each child runs in its own process group (POSIX session / Windows process
group) so that a timeout or cancel can kill the whole tree, including
grandchildren a shell may have started. Output pipes are drained by
background threads so a chatty child never blocks on a full pipe while the
caller polls.
"""

import logging
import os
import signal
import subprocess
import sys
import threading
import time
from collections.abc import Mapping
from typing import IO

from procexec.core.errors import InvocationError
from procexec.core.types import ExecutionResult, RunOptions

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 65536

# Time a child gets to exit after SIGTERM before SIGKILL.
_TERMINATE_GRACE_SECONDS = 2.0

# Time drain threads get to hit EOF after a kill before their pipes are abandoned.
_DRAIN_GRACE_SECONDS = 2.0


class _StreamCollector:
    """Drains one pipe into memory on a daemon thread.

    The drain thread owns the pipe and closes it on EOF. A pipe still held open
    by a process outside the child's process group is abandoned rather than
    closed under a blocked read(), since its descriptor number could be reused.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream
        self._chunks: list[bytes] = []
        self._thread = threading.Thread(target=self._drain, daemon=True)
        self._thread.start()

    def _drain(self) -> None:
        try:
            while True:
                chunk = self._stream.read(_CHUNK_SIZE)
                if not chunk:
                    break
                self._chunks.append(chunk)
        except OSError as e:
            logger.debug("Stopped reading pipe: %s", e)
        finally:
            self._stream.close()

    def join(self, timeout: float | None) -> bool:
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def data(self) -> bytes:
        return b"".join(self._chunks)


def _session_kwargs() -> dict[str, object]:
    if sys.platform == "win32":
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


def _signal_group(pid: int, sig: int) -> None:
    try:
        os.killpg(pid, sig)
    except ProcessLookupError:
        # Group already empty.
        return


def terminate_process_tree(process: subprocess.Popen[bytes]) -> None:
    """Forcibly stop a child and everything in its process group.

    POSIX: SIGTERM to the group, SIGKILL if it is still alive after a grace
    period. Windows: `taskkill /T /F` on the tree, then TerminateProcess.
    Always reaps the child before returning.
    """
    if sys.platform == "win32":
        subprocess.run(
            ["taskkill", "/F", "/T", "/PID", str(process.pid)],
            capture_output=True,
            check=False,
        )
        if process.poll() is None:
            process.kill()
        process.wait()
        return

    _signal_group(process.pid, signal.SIGTERM)
    try:
        process.wait(timeout=_TERMINATE_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        logger.debug("pid %d ignored SIGTERM, sending SIGKILL", process.pid)
        _signal_group(process.pid, signal.SIGKILL)
        process.wait()
    # Grandchildren may outlive the group leader; make sure none keep pipes open.
    _signal_group(process.pid, signal.SIGKILL)


class ProcessHandle:
    """Non-blocking handle on a running child process.

    poll() and wait() both enforce the RunOptions timeout, measured from
    spawn. cancel() kills the child. The handle is a context manager that
    cancels a still-running child on exit, so pipes and the process are always
    released.

    Example:
        >>> with invoker.start(CommandSpec("make", ("test",))) as handle:
        ...     while handle.poll() is None:
        ...         do_other_work()
        ...     result = handle.result()
    """

    def __init__(
        self,
        process: subprocess.Popen[bytes],
        *,
        argv: tuple[str, ...],
        options: RunOptions,
        started_at: float,
    ) -> None:
        self._process = process
        self._argv = argv
        self._options = options
        self._started_at = started_at
        self._timed_out = False
        self._killed = False
        self._result: ExecutionResult | None = None
        self._lock = threading.Lock()
        self._collectors: dict[str, _StreamCollector] = {}
        if process.stdout is not None:
            self._collectors["stdout"] = _StreamCollector(process.stdout)
        if process.stderr is not None:
            self._collectors["stderr"] = _StreamCollector(process.stderr)

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def argv(self) -> tuple[str, ...]:
        return self._argv

    def _remaining_seconds(self) -> float | None:
        timeout = self._options.timeout_seconds
        if timeout is None:
            return None
        return timeout - (time.monotonic() - self._started_at)

    def _deadline_passed(self) -> bool:
        remaining = self._remaining_seconds()
        return remaining is not None and remaining <= 0

    def _streams_closed(self, timeout: float | None) -> bool:
        """Wait up to `timeout` in total for every drain thread to hit EOF."""
        end = None if timeout is None else time.monotonic() + timeout
        for collector in self._collectors.values():
            limit = None if end is None else max(0.0, end - time.monotonic())
            if not collector.join(limit):
                return False
        return True

    def poll(self) -> ExecutionResult | None:
        """Return the result if the child has finished, else None.

        The child counts as finished once it has exited and its output pipes
        are closed; a background process still writing to them keeps the
        handle running until it exits or the deadline passes.
        """
        if self._result is not None:
            return self._result
        if self._process.poll() is None:
            if self._deadline_passed():
                self._kill(timed_out=True)
                return self._finish()
            return None
        if self._streams_closed(0):
            return self._finish()
        if self._deadline_passed():
            self._kill_remnants(timed_out=True)
            return self._finish()
        return None

    def wait(self, timeout_ms: int | None = None) -> ExecutionResult | None:
        """Block until the child finishes, its deadline passes, or timeout_ms elapses.

        Args:
            timeout_ms: Maximum time to block in this call. Expiry of this
                wait does not kill the child; only the RunOptions deadline does.

        Returns:
            The result, or None if timeout_ms elapsed first
        """
        if self._result is not None:
            return self._result
        remaining = self._remaining_seconds()
        limits = [limit for limit in (remaining, _ms_to_seconds(timeout_ms)) if limit is not None]
        wait_for = max(0.0, min(limits)) if limits else None
        call_started = time.monotonic()

        try:
            self._process.wait(timeout=wait_for)
        except subprocess.TimeoutExpired:
            if self._deadline_passed():
                self._kill(timed_out=True)
                return self._finish()
            return None

        drain_for = None
        if wait_for is not None:
            drain_for = max(0.0, wait_for - (time.monotonic() - call_started))
        if self._streams_closed(drain_for):
            return self._finish()
        if self._deadline_passed():
            self._kill_remnants(timed_out=True)
            return self._finish()
        return None

    def result(self) -> ExecutionResult:
        """Block until the child finishes (or is killed on timeout)."""
        while True:
            result = self.wait()
            if result is not None:
                return result

    def cancel(self) -> ExecutionResult:
        """Forcibly terminate the child (if running) and return its result."""
        if self._result is not None:
            return self._result
        if self._process.poll() is None:
            logger.debug("Cancelling pid %d", self._process.pid)
            self._kill(timed_out=False)
        elif not self._streams_closed(0):
            self._kill_remnants(timed_out=False)
        return self._finish()

    def __enter__(self) -> "ProcessHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def _kill(self, *, timed_out: bool) -> None:
        if timed_out:
            logger.debug(
                "pid %d exceeded timeout of %sms, terminating",
                self._process.pid,
                self._options.timeout_ms,
            )
        self._timed_out = self._timed_out or timed_out
        self._killed = True
        terminate_process_tree(self._process)

    def _kill_remnants(self, *, timed_out: bool) -> None:
        """Kill processes left in the child's group after the child itself exited."""
        logger.debug(
            "pid %d exited but its output pipes are still open, killing its process group",
            self._process.pid,
        )
        self._timed_out = self._timed_out or timed_out
        self._killed = True
        # Windows has no group to signal once the leader is gone; the drain
        # grace period in _finish() bounds the wait instead.
        if sys.platform != "win32":
            _signal_group(self._process.pid, signal.SIGKILL)

    def _finish(self) -> ExecutionResult:
        with self._lock:
            if self._result is not None:
                return self._result

            exit_code = self._process.wait()
            grace = _DRAIN_GRACE_SECONDS if self._killed else None
            for name, collector in self._collectors.items():
                if collector.join(grace):
                    continue
                if sys.platform != "win32":
                    _signal_group(self._process.pid, signal.SIGKILL)
                if not collector.join(grace):
                    logger.debug(
                        "%s pipe of pid %d is held open outside its process group, abandoning",
                        name,
                        self._process.pid,
                    )

            duration = time.monotonic() - self._started_at
            self._result = ExecutionResult(
                exit_code=exit_code,
                stdout=self._decode("stdout"),
                stderr=self._decode("stderr"),
                timed_out=self._timed_out,
                argv=self._argv,
                pid=self._process.pid,
                duration_seconds=duration,
            )
            logger.debug(
                "pid %d finished: exit_code=%d timed_out=%s duration=%.3fs",
                self._process.pid,
                exit_code,
                self._timed_out,
                duration,
            )
            return self._result

    def _decode(self, name: str) -> str | bytes:
        collector = self._collectors.get(name)
        raw = collector.data() if collector is not None else b""
        if not self._options.text:
            return raw
        text = raw.decode(self._options.encoding, errors="replace")
        return text.replace("\r\n", "\n")


def _ms_to_seconds(timeout_ms: int | None) -> float | None:
    if timeout_ms is None:
        return None
    return timeout_ms / 1000.0


def spawn(
    invocation: list[str] | str,
    *,
    options: RunOptions,
    env: Mapping[str, str] | None,
    label: str,
    executable: str | None = None,
) -> ProcessHandle:
    """Start a child process and return a handle to it.

    Args:
        invocation: Argument vector, or a raw command string (cmd.exe only)
        options: Capture/timeout/cwd settings
        env: Complete child environment, or None to inherit
        label: Program or shell name used in error messages
        executable: Resolved executable path replacing the argv[0] lookup

    Raises:
        InvocationError: SPAWN_FAILED if the OS refuses to start the process
    """
    if options.capture_stdout:
        stdout: int | None = subprocess.PIPE
    else:
        stdout = None

    if options.merge_streams:
        stderr: int | None = subprocess.STDOUT
    elif options.capture_stderr:
        stderr = subprocess.PIPE
    else:
        stderr = None

    stdin = None if options.inherit_stdin else subprocess.DEVNULL

    argv = tuple(invocation) if isinstance(invocation, list) else (invocation,)
    logger.debug("Spawning %s (cwd=%s)", argv, options.working_directory)

    try:
        process = subprocess.Popen(
            invocation,
            executable=executable,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            cwd=options.working_directory,
            env=env,
            bufsize=0,
            **_session_kwargs(),
        )
    except OSError as e:
        raise InvocationError.spawn_failed(label, e) from e

    logger.debug("Spawned pid %d", process.pid)
    return ProcessHandle(process, argv=argv, options=options, started_at=time.monotonic())
