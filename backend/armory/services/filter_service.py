# Overview: Report query matching for movement records.

from __future__ import annotations

from ..records import ReportFilter, Transfer


def matches_base(record, base: str | None) -> bool:
    """Unset base matches everything; a Transfer matches on either end."""
    if not base:
        return True
    if isinstance(record, Transfer):
        return base in (record.from_base, record.to_base)
    return record.base == base


def matches_equipment_type(record, equipment_type) -> bool:
    if not equipment_type:
        return True
    return record.equipment_type == equipment_type


def matches_date(record, date_cutoff) -> bool:
    if date_cutoff is None:
        return True
    return record.date == date_cutoff


def matches(record, report_filter: ReportFilter | None) -> bool:
    """
    Every set filter field must equal the record's field.

    The date is compared for equality here; the balance report applies its own
    `<` / `<=` comparisons against the cutoff.
    """
    if report_filter is None:
        return True
    return (
        matches_date(record, report_filter.date_cutoff)
        and matches_base(record, report_filter.base)
        and matches_equipment_type(record, report_filter.equipment_type)
    )


def select(records, report_filter: ReportFilter | None) -> list:
    """Matching records, insertion order preserved."""
    return [record for record in records if matches(record, report_filter)]
