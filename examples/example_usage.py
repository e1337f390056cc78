"""Example: call the service layer directly (no Flask).

Prints the reconciled timesheet for the current pay period.
"""

from config import load_settings

from src.timekeeper.timekeeper.container import build_container


def main():
    settings = load_settings()
    container = build_container(
        db_config=settings.DB_CONFIG,
        timezone_name=settings.TIMEZONE,
        hourly_rate=settings.HOURLY_RATE,
    )
    report = container.payroll_report_service.build_period_report()
    print(report.period.label, report.totals)
    for row in report.summary:
        print(row)


if __name__ == "__main__":
    main()
