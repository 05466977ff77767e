import argparse
import logging
import sys

from src.forum.application.service import MembershipService
from src.shared.observability import configure_observability
from src.shared.telemetry import Telemetry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forum-tiers",
        description="Validate the membership tier hierarchy and print its capabilities.",
    )
    parser.add_argument(
        "--no-metrics-server",
        action="store_true",
        help="Do not start the Prometheus metrics HTTP server",
    )
    return parser


def format_matrix(service: MembershipService) -> list[str]:
    """One line per tier: label, capability flags, upgrade targets."""
    lines = [f"{'Tier':<10} {'post':<6} {'comment':<8} {'follow':<7} upgrades"]
    for label, caps in service.capability_matrix().items():
        upgrades = ", ".join(t.label() for t in service.upgrade_paths(label)) or "-"
        lines.append(
            f"{label:<10} {str(caps.can_post):<6} {str(caps.can_comment):<8} "
            f"{str(caps.can_follow):<7} {upgrades}"
        )
    return lines


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Console fallback for anything logging outside the forum.* loggers
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    configure_observability(start_metrics_server=not args.no_metrics_server)

    Telemetry.start_trace()
    service = MembershipService()
    service.validate_hierarchy()

    for line in format_matrix(service):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
