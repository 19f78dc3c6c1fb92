"""
Repository Compliance Scoring Engine — Main Orchestrator

Usage:
    python -m compliance_engine --audit-file audit.json
    python -m compliance_engine --audit-file audit.json --frameworks OWASP,NIST
    python -m compliance_engine --audit-file audit.json --output compliance.json
    python -m compliance_engine --audit-file audit.json -o ./reports --formats json markdown csv
    python -m compliance_engine --list-frameworks
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from . import __version__
from .audit import InvalidAuditData, load_audit_file
from .config import (
    DEFAULT_FRAMEWORKS,
    SUPPORTED_FORMATS,
    EngineConfig,
    parse_framework_list,
)
from .reporting import (
    build_metadata,
    export_csv,
    export_json,
    export_markdown,
    print_summary,
)
from .scoring import COMPLIANCE_FRAMEWORKS, ComplianceReport, compute_report

logger = logging.getLogger("compliance_engine")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="compliance-engine",
        description="Check compliance against security frameworks",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--audit-file",
        type=Path,
        help="Audit results JSON file",
    )
    parser.add_argument(
        "--frameworks",
        type=str,
        default=None,
        help=f"Frameworks to check (comma-separated, default: {','.join(DEFAULT_FRAMEWORKS)})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output compliance report file (JSON)",
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=None,
        help="Directory for timestamped report files (see --formats)",
    )
    parser.add_argument(
        "--formats",
        nargs="+",
        choices=SUPPORTED_FORMATS,
        default=None,
        help="Output formats to generate in --output-dir (default: json)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Path to JSON configuration file",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on malformed audit data instead of skipping the framework",
    )
    parser.add_argument(
        "--list-frameworks",
        action="store_true",
        help="List available frameworks and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EngineConfig:
    """Build configuration from the config file, then apply CLI overrides."""
    if args.config:
        config = EngineConfig.from_file(args.config)
    else:
        config = EngineConfig()

    if args.frameworks:
        config.frameworks = parse_framework_list(args.frameworks)
    if args.output:
        config.output = str(args.output)
    if args.output_dir:
        config.output_dir = str(args.output_dir)
    if args.formats:
        config.formats = list(args.formats)
    if args.strict:
        config.strict = True
    if args.verbose:
        config.verbose = True
    return config


def list_frameworks() -> int:
    print(f"\n  {'Code':<10s} {'Name':<32s} {'Controls'}")
    print(f"  {'─'*10} {'─'*32} {'─'*8}")
    for code, framework in COMPLIANCE_FRAMEWORKS.items():
        print(f"  {code:<10s} {framework.name:<32s} {len(framework.controls)}")
    print()
    return 0


def generate_reports(
    report: ComplianceReport,
    config: EngineConfig,
    audit_file: Path,
    run_id: str,
) -> list[Path]:
    """Write every requested output and return the created paths."""
    created = []
    metadata = build_metadata(str(audit_file), config.frameworks)

    if config.output_path:
        path = export_json(report, config.output_path, metadata)
        created.append(path)
        print(f"✅ Compliance report saved to: {path}")

    export_dir = config.export_dir
    if export_dir:
        if "json" in config.formats:
            path = export_json(report, export_dir / f"compliance_report_{run_id}.json", metadata)
            created.append(path)
            print(f"  📄 JSON:       {path}")

        if "markdown" in config.formats:
            path = export_markdown(report, export_dir, run_id, audit_file.name)
            created.append(path)
            print(f"  📝 Markdown:   {path}")

        if "csv" in config.formats:
            paths = export_csv(report, export_dir, run_id)
            created.extend(paths)
            for p in paths:
                print(f"  📊 CSV:        {p}")

    return created


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    if args.list_frameworks:
        return list_frameworks()
    if not args.audit_file:
        print("❌ --audit-file is required", file=sys.stderr)
        return 2

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"❌ Error loading configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    run_id = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S") + "_" + uuid.uuid4().hex[:8]
    logger.debug(f"Run {run_id}: frameworks={config.frameworks} strict={config.strict}")

    try:
        audit = load_audit_file(args.audit_file)
        report = compute_report(config.frameworks, audit, strict=config.strict)
        generate_reports(report, config, args.audit_file, run_id)
    except InvalidAuditData as e:
        print(f"❌ Error checking compliance: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"❌ Error writing report: {e}", file=sys.stderr)
        return 1

    print_summary(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
