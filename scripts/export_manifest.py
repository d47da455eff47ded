"""Write the Slack app manifest and the shortcut trigger definition to disk.

Usage:
    python scripts/export_manifest.py https://example.com/slack/events [output_dir]

The manifest lands in ``<output_dir>/manifest.json`` and the trigger in
``<output_dir>/triggers/submit_request.json``; ``output_dir`` defaults to the
current directory.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from editable_request.workflows import SUBMIT_REQUEST_TRIGGER, build_manifest


def export_manifest(request_url: str, output_dir: Path) -> tuple[Path, Path]:
    manifest = build_manifest(request_url).to_slack_manifest()
    trigger = SUBMIT_REQUEST_TRIGGER.model_dump(exclude_none=True)

    manifest_path = output_dir / "manifest.json"
    trigger_path = output_dir / "triggers" / "submit_request.json"
    trigger_path.parent.mkdir(parents=True, exist_ok=True)

    manifest_path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    trigger_path.write_text(json.dumps(trigger, indent=2) + "\n", encoding="utf-8")
    return manifest_path, trigger_path


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    target = Path(sys.argv[2]) if len(sys.argv) > 2 else Path.cwd()
    for path in export_manifest(sys.argv[1], target):
        print(f"Wrote {path}")
