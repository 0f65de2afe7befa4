#!/usr/bin/env python
"""
Run script for the KrishiLink app.
Use: python run.py [extra streamlit options]
Or: streamlit run krishilink/ui/app.py

The port comes from KRISHILINK_UI_PORT (default 8501).
"""
import sys
import subprocess
from pathlib import Path

from krishilink.config import get_config


APP_PATH = Path(__file__).parent / "krishilink" / "ui" / "app.py"


def build_command(extra_args=()):
    """Streamlit command line for the app, with any extra options appended."""
    return [
        sys.executable, "-m", "streamlit", "run",
        str(APP_PATH),
        f"--server.port={get_config().ui.port}",
        "--browser.gatherUsageStats=false",
        *extra_args,
    ]


def main():
    """Run the Streamlit app."""
    sys.exit(subprocess.run(build_command(sys.argv[1:])).returncode)


if __name__ == "__main__":
    main()
