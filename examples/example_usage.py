"""Example: use the service layer directly (no Flask), backed by the in-memory store.

Controllers are thin; the rules live in the services.
"""

from datetime import date

from tuition_center.container import build_container, build_store


def main():
    container = build_container(store=build_store(backend="memory"))

    teacher = container.staff_service.add(
        full_name="Neha Joshi", role="Teacher", phone="9810000001", salary_type="Monthly", basic_salary=26000
    )
    for day in range(1, 25):
        container.attendance_service.mark_day(date(2024, 3, day), {teacher.staff_id: "Present"})
    container.attendance_service.mark_day(date(2024, 3, 25), {teacher.staff_id: "Half Day"})

    salary = container.payroll_service.generate(teacher.staff_id, "March", 2024)
    print(salary.to_dict())


if __name__ == "__main__":
    main()
