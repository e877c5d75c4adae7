"""CLI tests for the logicbridge entry point.

Test cases live in 01_cli/*.tests files. Format:

    === test name
    args: --target c --stop-at parse
    pseudo-code here
    (stdin for the compiler)
    ---
    exit: 0
    stderr: error: some message
    stdout-contains: printf
    stdout-empty: true
    stderr-empty: true
    exit-not: 2
    ---

Special directives in the input section:
    args:           CLI arguments (first line, required)
    stdin-bytes:    hex-encoded raw bytes instead of text (e.g. "ff fe")

Assertion directives in the expected section:
    exit:             exact exit code
    exit-not:         exit code must NOT equal this
    stderr:           exact stderr content (trailing newline added)
    stderr-contains:  stderr must contain substring
    stderr-empty:     stderr must be empty
    stdout-contains:  stdout must contain substring
    stdout-empty:     stdout must be empty
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

CLI_DIR = Path(__file__).parent / "01_cli"
SRC_DIR = Path(__file__).parent.parent / "src"


def parse_cli_test_file(path: Path) -> list[tuple[str, dict]]:
    """Parse a .tests file into (name, spec) tuples.

    Each spec dict has keys: args, stdin, stdin_bytes, assertions.
    """
    lines = path.read_text().split("\n")
    result: list[tuple[str, dict]] = []
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
            result.append((test_name, _parse_spec(input_lines, expected_lines)))
        else:
            i += 1
    return result


def _parse_spec(input_lines: list[str], expected_lines: list[str]) -> dict:
    spec: dict = {
        "args": [],
        "stdin": None,
        "stdin_bytes": None,
        "assertions": [],
    }
    body_start = 0
    if input_lines and input_lines[0].startswith("args:"):
        args_str = input_lines[0][5:].strip()
        spec["args"] = args_str.split() if args_str else []
        body_start = 1
    remaining = input_lines[body_start:]
    if remaining and remaining[0].startswith("stdin-bytes:"):
        spec["stdin_bytes"] = bytes.fromhex(remaining[0][len("stdin-bytes:") :].strip())
    else:
        spec["stdin"] = "\n".join(remaining)
    for line in expected_lines:
        line = line.strip()
        if not line:
            continue
        if line.startswith("exit:"):
            spec["assertions"].append(("exit", int(line[5:].strip())))
        elif line.startswith("exit-not:"):
            spec["assertions"].append(("exit-not", int(line[9:].strip())))
        elif line.startswith("stderr:"):
            spec["assertions"].append(("stderr", line[7:].strip()))
        elif line.startswith("stderr-contains:"):
            spec["assertions"].append(("stderr-contains", line[16:].strip()))
        elif line.startswith("stderr-empty:"):
            spec["assertions"].append(("stderr-empty", None))
        elif line.startswith("stdout-contains:"):
            spec["assertions"].append(("stdout-contains", line[16:].strip()))
        elif line.startswith("stdout-empty:"):
            spec["assertions"].append(("stdout-empty", None))
    return spec


def discover_cli_tests() -> list[tuple[str, dict]]:
    results = []
    for test_file in sorted(CLI_DIR.glob("*.tests")):
        for name, spec in parse_cli_test_file(test_file):
            results.append((f"{test_file.stem}/{name}", spec))
    return results


def run_cli(args: list[str], stdin_data: bytes = b"") -> subprocess.CompletedProcess[bytes]:
    """Run the logicbridge CLI in a subprocess."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in [str(SRC_DIR), env.get("PYTHONPATH", "")] if p)
    return subprocess.run(
        [sys.executable, "-m", "logicbridge", *args],
        input=stdin_data,
        capture_output=True,
        cwd=CLI_DIR,
        env=env,
    )


def check_assertions(result: subprocess.CompletedProcess[bytes], assertions: list[tuple]) -> None:
    """Check all assertions against a CLI result."""
    for kind, value in assertions:
        if kind == "exit":
            assert result.returncode == value, (
                f"expected exit {value}, got {result.returncode}"
                f"\nstderr: {result.stderr.decode(errors='replace')}"
            )
        elif kind == "exit-not":
            assert result.returncode != value, f"expected exit != {value}, got {result.returncode}"
        elif kind == "stderr":
            actual = result.stderr.decode(errors="replace").rstrip("\n")
            assert actual == value, f"expected stderr {value!r}, got {actual!r}"
        elif kind == "stderr-contains":
            actual = result.stderr.decode(errors="replace")
            assert value in actual, f"expected stderr to contain {value!r}, got {actual!r}"
        elif kind == "stderr-empty":
            assert result.stderr == b"", f"expected empty stderr, got {result.stderr!r}"
        elif kind == "stdout-contains":
            actual = result.stdout.decode(errors="replace")
            assert value in actual, f"expected stdout to contain {value!r}, got {actual!r}"
        elif kind == "stdout-empty":
            assert result.stdout == b"", f"expected empty stdout, got {result.stdout[:200]!r}"


def pytest_generate_tests(metafunc):
    """Parametrize test_cli over all .tests files."""
    if "cli_spec" in metafunc.fixturenames:
        tests = discover_cli_tests()
        params = [pytest.param(spec, id=test_id) for test_id, spec in tests]
        metafunc.parametrize("cli_spec", params)


def test_cli(cli_spec: dict) -> None:
    """Run a single CLI test case from .tests file."""
    if cli_spec["stdin_bytes"] is not None:
        stdin_data = cli_spec["stdin_bytes"]
    else:
        stdin_data = cli_spec["stdin"].encode()
    result = run_cli(cli_spec["args"], stdin_data)
    check_assertions(result, cli_spec["assertions"])


PROGRAM = b"START\nSTACK s\nPUSH s 7\nPRINT TOP s\nEND\n"


def test_reads_input_file(tmp_path):
    source = tmp_path / "prog.pseudo"
    source.write_bytes(PROGRAM)
    result = run_cli(["--target", "cpp", str(source)])
    assert result.returncode == 0, result.stderr
    assert b"stack<int> s;" in result.stdout


def test_output_file(tmp_path):
    out = tmp_path / "out.c"
    result = run_cli(["--target", "c", "-o", str(out)], PROGRAM)
    assert result.returncode == 0, result.stderr
    assert result.stdout == b""
    assert "s[++s_top] = 7;" in out.read_text()


def test_output_directory_gets_generated_code_file(tmp_path):
    result = run_cli(["--target", "java", "--output", str(tmp_path)], PROGRAM)
    assert result.returncode == 0, result.stderr
    generated = tmp_path / "generated_code.java"
    assert generated.exists()
    assert "s.push(7);" in generated.read_text()


def test_unwritable_output(tmp_path):
    out = tmp_path / "missing" / "out.py"
    result = run_cli(["-o", str(out)], PROGRAM)
    assert result.returncode == 1
    assert result.stderr.decode().startswith("error: cannot write")


def test_generated_python_runs(tmp_path):
    out = tmp_path / "prog.py"
    assert run_cli(["-o", str(out)], PROGRAM).returncode == 0
    ran = subprocess.run([sys.executable, str(out)], capture_output=True, text=True)
    assert ran.returncode == 0, ran.stderr
    assert ran.stdout == "7\n"


def test_usage_error_in_process(capsys):
    from logicbridge.cli import main

    with pytest.raises(SystemExit) as exc:
        main(["--target", "cobol"])
    assert exc.value.code == 2
    assert "unknown target 'cobol'" in capsys.readouterr().err
