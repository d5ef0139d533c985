from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")


@dataclass
class Expected:
    path: Path
    is_dir: bool = False
    files: int | None = None


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    absent: list[Path] | None = None
    returncode: int = 0

    @property
    def root(self) -> Path:
        return EXAMPLES_ROOT / self.name

    def full_args(self) -> list[str]:
        return [sys.executable, "zoom.py", *self.args]


def _frames(name: str) -> str:
    return str(EXAMPLES_ROOT / name / "frames")


EXAMPLES: list[Example] = [
    Example(
        name="single-frame",
        args=["10", "10", "1", "--frame-dir", _frames("single-frame")],
        expected=[Expected(EXAMPLES_ROOT / "single-frame" / "frames", is_dir=True, files=1)],
    ),
    Example(
        name="two-frames",
        args=["10", "10", "2", "--frame-dir", _frames("two-frames")],
        expected=[Expected(EXAMPLES_ROOT / "two-frames" / "frames", is_dir=True, files=2)],
    ),
    Example(
        name="wide-gated",
        args=["4097", "10", "1", "--frame-dir", _frames("wide-gated")],
        expected=[],
        absent=[EXAMPLES_ROOT / "wide-gated" / "frames"],
    ),
    Example(
        name="too-many-frames-gated",
        args=["10", "10", "121", "--frame-dir", _frames("too-many-frames-gated")],
        expected=[],
        absent=[EXAMPLES_ROOT / "too-many-frames-gated" / "frames"],
    ),
    Example(
        name="narrow-rejected",
        args=["9", "10", "1", "--frame-dir", _frames("narrow-rejected")],
        expected=[],
        absent=[EXAMPLES_ROOT / "narrow-rejected" / "frames"],
        returncode=2,
    ),
    Example(
        name="no-frames-rejected",
        args=["10", "10", "0", "--frame-dir", _frames("no-frames-rejected")],
        expected=[],
        absent=[EXAMPLES_ROOT / "no-frames-rejected" / "frames"],
        returncode=2,
    ),
    Example(
        name="zoom-movie",
        args=[
            "256",
            "144",
            "60",
            "--frame-workers",
            "2",
            "--frame-dir",
            _frames("zoom-movie"),
            "--gif",
            str(EXAMPLES_ROOT / "zoom-movie" / "zoom.gif"),
        ],
        expected=[
            Expected(EXAMPLES_ROOT / "zoom-movie" / "frames", is_dir=True, files=60),
            Expected(EXAMPLES_ROOT / "zoom-movie" / "zoom.gif"),
        ],
    ),
    Example(
        name="custom-centre",
        args=[
            "160",
            "160",
            "5",
            "--x-mid",
            "-0.743643887",
            "--y-mid",
            "0.131825904",
            "--delta",
            "0.05",
            "--decay",
            "0.9",
            "--frame-dir",
            _frames("custom-centre"),
        ],
        expected=[Expected(EXAMPLES_ROOT / "custom-centre" / "frames", is_dir=True, files=5)],
    ),
    Example(
        name="verbose",
        args=["64", "48", "1", "--verbose", "--frame-dir", _frames("verbose")],
        expected=[Expected(EXAMPLES_ROOT / "verbose" / "frames", is_dir=True, files=1)],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _verify(example: Example) -> None:
    for expected in example.expected:
        if expected.is_dir:
            if not expected.path.is_dir():
                raise RuntimeError(f"Expected directory {expected.path} was not created")
            count = sum(1 for _ in expected.path.iterdir())
            if expected.files is not None and count != expected.files:
                raise RuntimeError(f"Directory {expected.path} holds {count} files, expected {expected.files}")
        else:
            if not expected.path.is_file():
                raise RuntimeError(f"Expected file {expected.path} was not created")
    for path in example.absent or []:
        if path.exists():
            raise RuntimeError(f"{path} should not have been created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _ensure_clean([example.root])
        example.root.mkdir(parents=True, exist_ok=True)
        completed = subprocess.run(example.full_args())
        if completed.returncode != example.returncode:
            raise RuntimeError(
                f"Example {example.name} exited with {completed.returncode}, expected {example.returncode}"
            )
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
