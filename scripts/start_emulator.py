"""Utility that launches a local table-service emulator in Docker for tablecompat."""

from __future__ import annotations

import argparse
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tablecompat.environment import EMULATOR_HOST_ENV_VAR
from tablecompat.errors import ConfigError
from tablecompat.settings import CONFIG_FILE, load_settings, save_settings

DEFAULT_CONTAINER = "tablecompat-emulator"
DEFAULT_PORT = 8086
DOCKER_IMAGE = "gcr.io/google.com/cloudsdktool/google-cloud-cli:emulators"


def run(cmd: list[str], *, check: bool = True, **kwargs) -> subprocess.CompletedProcess[str]:
    print("$", " ".join(cmd))
    return subprocess.run(cmd, check=check, text=True, **kwargs)


def container_exists(name: str) -> bool:
    result = subprocess.run(
        ["docker", "ps", "-a", "--filter", f"name={name}", "--format", "{{.ID}}"],
        text=True,
        capture_output=True,
    )
    return bool(result.stdout.strip())


def start_container(name: str, port: int) -> None:
    if container_exists(name):
        print(f"Container '{name}' already exists. Reusing it.")
        run(["docker", "start", name], check=False)
    else:
        run(
            [
                "docker",
                "run",
                "-d",
                "--name",
                name,
                "-p",
                f"{port}:8086",
                DOCKER_IMAGE,
                "gcloud",
                "beta",
                "emulators",
                "bigtable",
                "start",
                "--host-port=0.0.0.0:8086",
            ]
        )
    wait_for_start(port)


def wait_for_start(port: int, retries: int = 30, delay: float = 1.0) -> None:
    for _ in range(retries):
        try:
            with socket.create_connection(("localhost", port), timeout=delay):
                return
        except OSError:
            time.sleep(delay)
    print("Warning: emulator did not accept connections; continuing anyway.")


def update_settings(port: int, project_id: str, instance_id: str) -> None:
    builder = load_settings()
    builder.project_id = builder.project_id or project_id
    builder.instance_id = builder.instance_id or instance_id
    config = builder.enable_emulator_at("localhost", port).build()
    save_settings(config)
    print(f"Pointed {CONFIG_FILE} at the emulator on localhost:{port}.")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--container", default=DEFAULT_CONTAINER, help="Docker container name")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Host port to expose the emulator on")
    parser.add_argument("--project", default="emulator-project", help="Project id to store in settings")
    parser.add_argument("--instance", default="emulator-instance", help="Instance id to store in settings")
    parser.add_argument("--no-settings", action="store_true", help="Leave the settings file untouched")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or sys.argv[1:])
    try:
        start_container(args.container, args.port)
    except FileNotFoundError:
        print("Docker is not installed or not on PATH.")
        return 1
    if not args.no_settings:
        try:
            update_settings(args.port, args.project, args.instance)
        except ConfigError as exc:
            print(f"Could not update settings: {exc}")
            return 1
    print(f"Emulator is ready. export {EMULATOR_HOST_ENV_VAR}=localhost:{args.port}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
