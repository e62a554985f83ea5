#!/usr/bin/env python3
import argparse
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
BACKEND_DIR = ROOT / 'backend'


def main() -> int:
    parser = argparse.ArgumentParser(description='Run the club test gate API with auto-reload.')
    parser.add_argument('--host', default='0.0.0.0')
    parser.add_argument('--port', type=int, default=8001)
    args = parser.parse_args()

    backend_env = os.environ.copy()
    backend_env.setdefault('AUTO_CREATE_TABLES', 'true')

    backend_cmd = [
        sys.executable,
        '-m',
        'uvicorn',
        'testgate.main:app',
        '--host',
        args.host,
        '--port',
        str(args.port),
        '--reload',
    ]
    try:
        return subprocess.call(backend_cmd, cwd=str(BACKEND_DIR), env=backend_env)
    except KeyboardInterrupt:
        return 0


if __name__ == '__main__':
    raise SystemExit(main())
