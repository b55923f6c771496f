"""Example: use the service layer directly (no Flask).

Controllers are thin; the payroll rules live in PayrollGenerator and its calculator.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.payroll.config import PayrollConfig


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, payroll_config=PayrollConfig.from_settings(settings))

    result = container.payroll_generator.generate_for_period(1, 2026)
    print(result.to_dict())

    for row in container.payroll_query_service.list_records(month=1, year=2026):
        print(row.full_name, row.department_name, row.record.net_salary)

    for summary in container.payroll_query_service.department_summaries(month=1, year=2026):
        print(summary.department_name or "(no department)", summary.employee_count, summary.total_net_salary)


if __name__ == "__main__":
    main()
