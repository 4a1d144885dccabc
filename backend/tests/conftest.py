"""
Shared fixtures for the ffmpeg-api test suite.

Real S3 and real ffmpeg are never used here:
- FakeGateway keeps objects in memory
- fake_ffmpeg is a small Python script installed as an executable that
  copies `-i <src>` to its last argument, fails on `--fail`, and creates
  a directory on `--mkdir <name>`
"""

import sys
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest
from fastapi.testclient import TestClient

from ffmpeg_api.config import Settings
from ffmpeg_api.execution.ffmpeg import FFmpegRunner
from ffmpeg_api.main import create_app
from ffmpeg_api.storage.errors import StorageTransferError
from ffmpeg_api.storage.gateway import StorageGateway, join_key, parse_s3_address


FAKE_FFMPEG_SCRIPT = """#!@PYTHON@
import os
import shutil
import sys

args = sys.argv[1:]

log_path = os.environ.get("FAKE_FFMPEG_LOG")
if log_path:
    with open(log_path, "a") as log:
        log.write(" ".join(args) + "\\n")

if args.count("-hide_banner") != 1 or args[0] != "-hide_banner":
    sys.stderr.write("expected -hide_banner exactly once, first\\n")
    sys.exit(2)

if "--fail" in args:
    sys.stderr.write("Invalid data found when processing input\\n")
    sys.stderr.write("Conversion failed!\\n")
    sys.exit(1)

if args[1:2] == ["--mkdir"]:
    os.mkdir(args[2])
    sys.exit(0)

if "-i" in args:
    src = args[args.index("-i") + 1]
    dst = args[-1]
    if not os.path.exists(src):
        sys.stderr.write(src + ": No such file or directory\\n")
        sys.exit(1)
    shutil.copyfile(src, dst)

sys.stderr.write("fake ffmpeg done\\n")
"""


class FakeGateway(StorageGateway):
    """In-memory storage gateway."""
    
    def __init__(
        self,
        objects: Optional[Dict[str, bytes]] = None,
        fail_puts: Optional[Set[str]] = None,
        get_delay: float = 0.0,
    ):
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.fail_puts = set(fail_puts or ())
        self.get_delay = get_delay
        self.gets: List[str] = []
        self.puts: List[Tuple[str, str]] = []
        self._lock = threading.Lock()
    
    def get(self, address: str) -> bytes:
        parse_s3_address(address)
        with self._lock:
            self.gets.append(address)
        if self.get_delay:
            time.sleep(self.get_delay)
        if address not in self.objects:
            raise StorageTransferError("get", address, "NoSuchKey")
        return self.objects[address]
    
    def put(self, base_address: str, local_path: Path, name: str) -> str:
        bucket, prefix = parse_s3_address(base_address)
        address = f"s3://{bucket}/{join_key(prefix, name)}"
        if name in self.fail_puts:
            raise StorageTransferError("put", address, "AccessDenied")
        with self._lock:
            self.puts.append((base_address, name))
            self.objects[address] = Path(local_path).read_bytes()
        return address


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def fake_ffmpeg(tmp_path_factory) -> Path:
    """Executable stand-in for ffmpeg."""
    path = tmp_path_factory.mktemp("bin") / "ffmpeg"
    path.write_text(FAKE_FFMPEG_SCRIPT.replace("@PYTHON@", sys.executable))
    path.chmod(0o755)
    return path


@pytest.fixture
def ffmpeg_log(tmp_path, monkeypatch) -> Path:
    """File the fake ffmpeg appends each invocation's arguments to."""
    path = tmp_path / "ffmpeg_calls.log"
    monkeypatch.setenv("FAKE_FFMPEG_LOG", str(path))
    return path


@pytest.fixture
def temp_root(tmp_path) -> Path:
    root = tmp_path / "jobs"
    root.mkdir()
    return root


@pytest.fixture
def workspace(tmp_path) -> Path:
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def app(temp_root, fake_ffmpeg, gateway):
    settings = Settings(temp_root=str(temp_root), ffmpeg_binary=str(fake_ffmpeg), log_level="DEBUG")
    return create_app(
        settings=settings,
        command_runner=FFmpegRunner(str(fake_ffmpeg)),
        gateway_factory=lambda config: gateway,
    )


@pytest.fixture
def client(app):
    return TestClient(app)
