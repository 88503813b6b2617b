from __future__ import annotations

from pathlib import Path

import pandas as pd

from ripbonus.core.schema import MonthlyReport


def export_daily_breakdown(path: Path, report: MonthlyReport) -> Path:
    rows = []
    for summary in report.daily_summaries:
        for item in summary.operator_breakdowns:
            data = item.model_dump(exclude={"roles"})
            data["work_date"] = summary.work_date.isoformat()
            data["bonus_pool"] = summary.bonus_pool
            rows.append(data)
    df = pd.DataFrame(rows)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
