"""
Tests for the Command Pipeline Executor.

1. -hide_banner appears exactly once, first, whatever the caller sent
2. Steps run in declared order inside the workspace
3. A later step sees files written by an earlier one
4. The first failure stops the pipeline and carries that step's stderr
5. Launch failures are reported as execution failures
"""

from pathlib import Path
from typing import List, Optional

import pytest

from ffmpeg_api.execution.base import CommandOutcome, CommandRunner, split_console
from ffmpeg_api.execution.errors import CommandExecutionError
from ffmpeg_api.execution.ffmpeg import HIDE_BANNER, FFmpegRunner, find_ffmpeg, sanitize_args
from ffmpeg_api.execution.pipeline import run_commands


class RecordingRunner(CommandRunner):
    """In-process runner that records calls and replays scripted outcomes."""
    
    def __init__(self, outcomes: Optional[List[CommandOutcome]] = None):
        self.outcomes = list(outcomes or [])
        self.calls: List[tuple] = []
    
    @property
    def name(self) -> str:
        return "recording"
    
    def run(self, args, cwd):
        self.calls.append((list(args), cwd))
        if self.outcomes:
            return self.outcomes.pop(0)
        return CommandOutcome(ok=True, exit_code=0)


class TestSanitizeArgs:
    
    @pytest.mark.parametrize(
        "args",
        [
            ["-i", "in.mp4", "out.mp4"],
            ["-hide_banner", "-i", "in.mp4", "out.mp4"],
            ["-hide_banner", "-i", "-hide_banner", "in.mp4", "out.mp4", "-hide_banner"],
        ],
        ids=["absent", "once", "three-times"],
    )
    def test_flag_exactly_once_and_first(self, args):
        sanitized = sanitize_args(args)
        
        assert sanitized[0] == HIDE_BANNER
        assert sanitized.count(HIDE_BANNER) == 1
        assert sanitized[1:] == ["-i", "in.mp4", "out.mp4"]
    
    def test_empty_args(self):
        assert sanitize_args([]) == [HIDE_BANNER]
    
    def test_other_arguments_pass_through_untouched(self):
        args = ["-y", "-i", "in.mp4", "-vf", "scale=-2:720", "-c:v", "libx264", "out.mp4"]
        assert sanitize_args(args) == [HIDE_BANNER] + args


class TestSplitConsole:
    
    def test_trailing_newline_removed(self):
        assert split_console("line 1\nline 2\n") == ["line 1", "line 2"]
    
    def test_inner_blank_lines_kept(self):
        assert split_console("a\n\nb\n\n") == ["a", "", "b"]
    
    def test_empty(self):
        assert split_console("") == []


class TestPipelineOrdering:
    
    def test_steps_run_in_order_inside_workspace(self, workspace):
        runner = RecordingRunner()
        commands = [["-i", "a", "b"], ["-i", "b", "c"], ["-i", "c", "d"]]
        
        run_commands(commands, workspace, runner)
        
        assert [args for args, _ in runner.calls] == [sanitize_args(c) for c in commands]
        assert all(cwd == workspace for _, cwd in runner.calls)
    
    def test_no_steps(self, workspace):
        runner = RecordingRunner()
        run_commands([], workspace, runner)
        assert runner.calls == []
    
    def test_failure_stops_remaining_steps(self, workspace):
        runner = RecordingRunner(
            [
                CommandOutcome(ok=True, exit_code=0, stderr_lines=["step 1 chatter"]),
                CommandOutcome(ok=False, exit_code=1, stderr_lines=["step 2 error"]),
            ]
        )
        
        with pytest.raises(CommandExecutionError) as exc_info:
            run_commands([["one"], ["two"], ["three"]], workspace, runner)
        
        assert len(runner.calls) == 2
        assert exc_info.value.step == 2
        assert exc_info.value.exit_code == 1
        assert exc_info.value.console_lines == ["step 2 error"]


class TestFFmpegRunner:
    
    def test_later_step_reads_earlier_output(self, workspace, fake_ffmpeg):
        (workspace / "in.mp4").write_bytes(b"source media")
        commands = [
            ["-i", "in.mp4", "mid.mp4"],
            ["-i", "mid.mp4", "out.mp4"],
        ]
        
        run_commands(commands, workspace, FFmpegRunner(str(fake_ffmpeg)))
        
        assert (workspace / "out.mp4").read_bytes() == b"source media"
    
    def test_flag_reaches_process_once(self, workspace, fake_ffmpeg, ffmpeg_log):
        (workspace / "in.mp4").write_bytes(b"x")
        commands = [["-hide_banner", "-hide_banner", "-hide_banner", "-i", "in.mp4", "out.mp4"]]
        
        run_commands(commands, workspace, FFmpegRunner(str(fake_ffmpeg)))
        
        assert ffmpeg_log.read_text().splitlines() == ["-hide_banner -i in.mp4 out.mp4"]
    
    def test_first_step_failure_skips_second(self, workspace, fake_ffmpeg, ffmpeg_log):
        (workspace / "in.mp4").write_bytes(b"x")
        commands = [
            ["-i", "in.mp4", "--fail", "mid.mp4"],
            ["-i", "mid.mp4", "out.mp4"],
        ]
        
        with pytest.raises(CommandExecutionError) as exc_info:
            run_commands(commands, workspace, FFmpegRunner(str(fake_ffmpeg)))
        
        assert exc_info.value.step == 1
        assert exc_info.value.exit_code == 1
        assert exc_info.value.console_lines == [
            "Invalid data found when processing input",
            "Conversion failed!",
        ]
        assert len(ffmpeg_log.read_text().splitlines()) == 1
        assert not (workspace / "out.mp4").exists()
    
    def test_only_failing_step_stderr_is_reported(self, workspace, fake_ffmpeg):
        (workspace / "in.mp4").write_bytes(b"x")
        commands = [
            ["-i", "in.mp4", "mid.mp4"],
            ["-i", "missing.mp4", "out.mp4"],
        ]
        
        with pytest.raises(CommandExecutionError) as exc_info:
            run_commands(commands, workspace, FFmpegRunner(str(fake_ffmpeg)))
        
        assert exc_info.value.step == 2
        assert exc_info.value.console_lines == ["missing.mp4: No such file or directory"]
    
    def test_launch_failure(self, workspace):
        runner = FFmpegRunner("/nonexistent/bin/ffmpeg")
        
        with pytest.raises(CommandExecutionError) as exc_info:
            run_commands([["-version"]], workspace, runner)
        
        assert exc_info.value.exit_code is None
        assert exc_info.value.console_lines
        assert "could not be started" in str(exc_info.value)


class TestFindFFmpeg:
    
    def test_absolute_executable(self, fake_ffmpeg):
        assert find_ffmpeg(str(fake_ffmpeg)) == str(fake_ffmpeg)
    
    def test_missing_absolute_path(self, tmp_path):
        assert find_ffmpeg(str(tmp_path / "ffmpeg")) is None
    
    def test_found_on_path(self, fake_ffmpeg, monkeypatch):
        monkeypatch.setenv("PATH", str(fake_ffmpeg.parent))
        assert Path(find_ffmpeg("ffmpeg")) == fake_ffmpeg
    
    def test_custom_name_not_on_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PATH", str(tmp_path))
        assert find_ffmpeg("ffmpeg-7") is None
