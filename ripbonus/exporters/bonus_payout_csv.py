from __future__ import annotations

from pathlib import Path

import pandas as pd

from ripbonus.core.schema import MonthlyReport


def payout_frame(report: MonthlyReport) -> pd.DataFrame:
    records = []
    for row in report.operator_totals:
        records.append({
            "person_id": row.person_id,
            "person": row.person_name,
            "period": f"{report.year:04d}-{report.month:02d}",
            "rip_bf": str(row.total_bf),
            "days_worked": row.days_worked,
            "days_qualified": row.days_qualified,
            "bonus": str(row.total_bonus),
        })
    columns = ["person_id", "person", "period", "rip_bf", "days_worked", "days_qualified", "bonus"]
    return pd.DataFrame(records, columns=columns)


def export_bonus_payout(path: Path, report: MonthlyReport) -> Path:
    df = payout_frame(report)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
