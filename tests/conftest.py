"""Shared helpers for the logicbridge test suite.

Data-driven tests live in NN_phase/*.tests files. Format:

    === test name
    input lines
    ---
    expected lines
    ---
"""

import shutil
from dataclasses import dataclass
from pathlib import Path

TESTS_DIR = Path(__file__).parent
SAMPLES_DIR = TESTS_DIR / "samples"


@dataclass
class Toolchain:
    """How to build and run one target's generated program."""

    name: str
    filename: str
    run_cmd: list[str] | None = None  # None means run the compiled executable
    compile_cmd: list[str] | None = None

    def available(self) -> bool:
        cmd = self.compile_cmd or self.run_cmd
        return cmd is not None and shutil.which(cmd[0]) is not None

    def get_compile_command(self, path: Path) -> list[str] | None:
        if not self.compile_cmd:
            return None
        return [arg.format(path=path, out=path.with_suffix("")) for arg in self.compile_cmd]

    def get_run_command(self, path: Path) -> list[str]:
        if self.run_cmd:
            return [arg.format(path=path) for arg in self.run_cmd]
        return [str(path.with_suffix(""))]


TOOLCHAINS: dict[str, Toolchain] = {
    "c": Toolchain("c", "program.c", compile_cmd=["gcc", "-o", "{out}", "{path}"]),
    "cpp": Toolchain("cpp", "program.cpp", compile_cmd=["g++", "-o", "{out}", "{path}"]),
    # Single-file source launch; the file name matches the public class
    "java": Toolchain("java", "GeneratedCode.java", run_cmd=["java", "{path}"]),
    "javascript": Toolchain("javascript", "program.js", run_cmd=["node", "{path}"]),
}


def parse_test_file(path: Path) -> list[tuple[str, str, str]]:
    """Parse .tests file into (name, input, expected) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            test_input = "\n".join(input_lines)
            expected = "\n".join(expected_lines).strip()
            result.append((test_name, test_input, expected))
        else:
            i += 1
    return result


def discover_tests(test_dir: Path) -> list[tuple[str, str, str]]:
    """Find all tests in a directory, returns (test_id, input, expected)."""
    results = []
    for test_file in sorted(test_dir.glob("*.tests")):
        for name, test_input, expected in parse_test_file(test_file):
            results.append((f"{test_file.stem}/{name}", test_input, expected))
    return results


def contains_normalized(haystack: str, needle: str) -> bool:
    """Check if needle appears in haystack, normalizing line-by-line whitespace."""
    needle_lines = [line.strip() for line in needle.strip().split("\n") if line.strip()]
    haystack_lines = [line.strip() for line in haystack.split("\n") if line.strip()]
    if not needle_lines:
        return True
    for i in range(len(haystack_lines)):
        if haystack_lines[i] == needle_lines[0]:
            match = True
            for j in range(1, len(needle_lines)):
                if (
                    i + j >= len(haystack_lines)
                    or haystack_lines[i + j] != needle_lines[j]
                ):
                    match = False
                    break
            if match:
                return True
    return False
