"""Timekeeper package.

Organized by feature modules (time_entries, timesheets, payroll) with a thin
Flask controller layer over service/repository layers. The reconciliation
engine in ``timesheets.reconciliation`` has no framework or storage coupling.
"""
