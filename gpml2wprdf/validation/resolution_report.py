"""
Resolution report: every element skipped during a conversion, with reason.

Drops are logged as they happen and collected here so a whole run can be
summarised per file and over a directory.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List

from gpml2wprdf.errors import DropReason

logger = logging.getLogger(__name__)


@dataclass
class ResolutionDrop:
    """An element (line, endpoint or group) left out of the output"""
    reason: DropReason
    message: str
    element_id: str = ""


@dataclass
class ResolutionReport:
    """Contains all drops and warnings of one pathway conversion"""
    file_path: str = ""
    parsed: bool = True
    drops: List[ResolutionDrop] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def add_drop(self, reason: DropReason, message: str, element_id: str = ""):
        """Add a drop to the report"""
        self.drops.append(ResolutionDrop(reason=reason, message=message, element_id=element_id or ""))
        logger.warning("[%s] %s%s", reason.value, message, f" (ID: {element_id})" if element_id else "")

    def add_warning(self, message: str):
        """Add a warning to the report"""
        self.warnings.append(message)
        logger.warning(message)

    def drops_for(self, reason: DropReason) -> List[ResolutionDrop]:
        return [drop for drop in self.drops if drop.reason is reason]

    def dropped_ids(self, reason: DropReason = None) -> List[str]:
        return [drop.element_id for drop in self.drops if reason is None or drop.reason is reason]

    def is_clean(self) -> bool:
        """Return True if nothing was dropped"""
        return len(self.drops) == 0


def print_report(report: ResolutionReport):
    """Print a resolution report"""
    print(f"\n{'='*80}")
    print(f"File: {report.file_path}")
    print(f"{'='*80}")

    print(f"\nStatistics:")
    for key, value in report.stats.items():
        print(f"  {key}: {value}")

    print(f"\nParsed: {report.parsed}")

    if report.drops:
        print(f"\nDropped ({len(report.drops)}):")
        reasons = defaultdict(int)
        for drop in report.drops:
            reasons[drop.reason.value] += 1

        for reason, count in sorted(reasons.items()):
            print(f"  {reason}: {count}")

        shown = report.drops if len(report.drops) <= 200 else report.drops[:20]
        if len(shown) < len(report.drops):
            print(f"\nShowing first 20 of {len(report.drops)} drops:")
        else:
            print("\nDetailed drops:")
        for drop in shown:
            elem_info = f" (ID: {drop.element_id})" if drop.element_id else ""
            print(f"  - [{drop.reason.value}]{elem_info}: {drop.message}")
    else:
        print("\nNothing dropped!")

    if report.warnings:
        print(f"\nWarnings ({len(report.warnings)}):")
        for warning in report.warnings[:200]:
            print(f"  - {warning}")
        if len(report.warnings) > 200:
            print(f"  ... and {len(report.warnings) - 200} more warnings")


def print_summary(reports: List[ResolutionReport]):
    """Print summary of all reports"""
    print(f"\n{'='*80}")
    print("CONVERSION SUMMARY")
    print(f"{'='*80}\n")

    total_files = len(reports)
    parsed_files = sum(1 for r in reports if r.parsed)
    clean_files = sum(1 for r in reports if r.parsed and r.is_clean())
    total_drops = sum(len(r.drops) for r in reports)
    total_warnings = sum(len(r.warnings) for r in reports)

    print(f"Total files: {total_files}")
    print(f"Converted files: {parsed_files}")
    print(f"Failed files: {total_files - parsed_files}")
    print(f"Files without drops: {clean_files}")
    print(f"Total drops: {total_drops}")
    print(f"Total warnings: {total_warnings}")

    if total_drops > 0:
        all_reasons = defaultdict(int)
        for report in reports:
            for drop in report.drops:
                all_reasons[drop.reason.value] += 1

        print(f"\nDrop reasons:")
        for reason, count in sorted(all_reasons.items(), key=lambda x: -x[1]):
            print(f"  {reason}: {count}")

    print()
