"""NiceGUI entrypoint for the hrdesk web UI."""

from __future__ import annotations

import argparse
import logging
from dataclasses import asdict
from typing import Any, Callable, Dict, Optional, Sequence

from nicegui import ui

from hrdesk.app.query_cache import RESOURCE_DASHBOARD_STATS
from hrdesk.utils.logging import configure_root
from hrdesk.viewmodels.employee_form_vm import INSURANCE_OPTIONS, SELECT_OPTIONS, EmployeeFormVM
from hrdesk.viewmodels.holiday_form_vm import HOLIDAY_TYPES, HolidayFormVM
from hrdesk.domain.holiday_calendar import MONTH_NAMES, days_label, format_compact_range, format_range
from hrdesk.web_ui.runtime import DASHBOARD_RESOURCES, DIRECTORY_RESOURCES, HOLIDAY_RESOURCES, WebRuntime

LOGGER = logging.getLogger(__name__)

PAGES = (("/", "Dashboard"), ("/employees", "Employees"), ("/holidays", "Holidays"), ("/settings", "Settings"))
KNOWN_ROUTES = {path for path, _ in PAGES}

ICONS = {
    "users": "groups",
    "calendar": "event",
    "clock": "schedule",
    "alert-circle": "error_outline",
    "receipt": "receipt_long",
    "file-text": "description",
    "zap": "bolt",
}

EMPLOYEE_INPUTS = (
    ("firstName", "First Name *"),
    ("middleName", "Middle Name"),
    ("lastName", "Last Name *"),
    ("email", "Email *"),
    ("phone", "Phone"),
    ("username", "Username *"),
    ("password", "Password"),
    ("gender", "Gender"),
    ("birthdate", "Birthdate (YYYY-MM-DD)"),
    ("street", "Street"),
    ("city", "City"),
    ("state", "State"),
    ("country", "Country"),
    ("status", "Status"),
    ("userType", "User Type"),
    ("bankAccount", "Bank Account"),
    ("insuranceOpted", "Insurance Opted"),
    ("joiningDate", "Joining Date (YYYY-MM-DD)"),
)

EMPLOYEE_COLUMNS = [
    {"name": "short_id", "label": "Employee ID", "field": "short_id", "align": "left"},
    {"name": "full_name", "label": "Name", "field": "full_name", "align": "left"},
    {"name": "email", "label": "Email", "field": "email", "align": "left"},
    {"name": "department", "label": "Department", "field": "department", "align": "left"},
    {"name": "role", "label": "Role", "field": "role", "align": "left"},
    {"name": "status", "label": "Status", "field": "status", "align": "left"},
    {"name": "actions", "label": "Actions", "field": "id", "align": "right"},
]

HOLIDAY_COLUMNS = [
    {"name": "name", "label": "Holiday Name", "field": "name", "align": "left"},
    {"name": "from_date", "label": "From Date", "field": "from_date", "align": "left"},
    {"name": "to_date", "label": "To Date", "field": "to_date", "align": "left"},
    {"name": "total_days", "label": "Total Days", "field": "total_days", "align": "left"},
    {"name": "actions", "label": "Actions", "field": "id", "align": "right"},
]


def _install_theme() -> None:
    """Install global CSS/theme tokens for the web UI."""
    ui.add_head_html(
        """
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&family=JetBrains+Mono:wght@400&display=swap" rel="stylesheet">
<style>
:root {
  --hr-bg: #f6f7fb;
  --hr-card: #ffffff;
  --hr-border: #e3e6ef;
  --hr-muted: #667085;
}
body { font-family: 'Inter', sans-serif; background: var(--hr-bg); }
.hr-page { max-width: 1280px; margin: 0 auto; padding: 20px; width: 100%; }
.hr-card { background: var(--hr-card); border: 1px solid var(--hr-border); border-radius: 10px; }
.hr-muted { color: var(--hr-muted); }
.hr-mono { font-family: 'JetBrains Mono', monospace; font-size: 12px; }
.hr-stat { cursor: pointer; min-width: 220px; }
.hr-stat:hover { background: #f0f3fa; }
</style>
        """
    )


def _flush_notifications(runtime: WebRuntime) -> None:
    """Show queued view-model notifications as NiceGUI toasts."""
    for note in runtime.drain_notifications():
        ui.notify(
            note.message,
            type="negative" if note.is_error else "positive",
            caption=note.title,
        )


def _notify_error(exc: Exception) -> None:
    ui.notify(str(exc), type="negative", close_button="OK")


def _fetch_after_render(
    runtime: WebRuntime,
    resources: Sequence[str],
    fetch: Callable[[], Any],
    redraw: Callable[[], None],
) -> None:
    """Fetch missing or stale resources once the page is on screen, then redraw."""
    if not runtime.needs_load(resources):
        return

    def _run() -> None:
        fetch()
        redraw()

    ui.timer(0, _run, once=True)


def _page_frame(runtime: WebRuntime, title: str, subtitle: str) -> None:
    with ui.header().classes("items-center justify-between bg-white text-black shadow-1"):
        ui.label("HR Desk").classes("text-h6")
        with ui.row().classes("q-gutter-md items-center"):
            for path, label in PAGES:
                ui.link(label, path).classes("text-body1")
            ui.label(runtime.status_message).classes("hr-mono hr-muted")
    ui.label(title).classes("text-h4 q-mt-md")
    ui.label(subtitle).classes("hr-muted q-mb-md")


def _build_ui(runtime: WebRuntime) -> None:
    """Register the NiceGUI pages for the runtime."""

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------
    @ui.page("/")
    def dashboard() -> None:
        @ui.refreshable
        def render() -> None:
            vm = runtime.refresh_dashboard(load=False)
            welcome = vm.welcome()
            with ui.column().classes("hr-page"):
                _page_frame(runtime, welcome.title, welcome.subtitle)
                with ui.row().classes("w-full q-gutter-md"):
                    if vm.is_loading:
                        for _ in range(vm.skeleton_count):
                            with ui.card().classes("hr-card hr-stat"):
                                ui.skeleton().classes("w-24 h-4")
                                ui.skeleton().classes("w-16 h-8")
                    for card in vm.cards():
                        with ui.card().classes("hr-card hr-stat").on(
                            "click", lambda _, r=card.route: _go(r)
                        ):
                            with ui.row().classes("w-full justify-between items-center"):
                                ui.label(card.title).classes("text-subtitle2")
                                ui.icon(ICONS.get(card.icon_key, "info"), color=card.color_token)
                            value_classes = "text-h6" if card.is_text_value else "text-h4"
                            ui.label(str(card.value)).classes(value_classes)
                            ui.label(card.description).classes("hr-muted text-caption")
                panel = vm.pending()
                if panel.visible:
                    with ui.card().classes("hr-card w-full q-mt-md"):
                        ui.label("Pending Actions").classes("text-h6")
                        for row in panel.rows:
                            with ui.row().classes("w-full justify-between items-center"):
                                ui.label(row.label)
                                if row.count:
                                    ui.badge(str(row.count), color="negative")

        def _go(route: Optional[str]) -> None:
            if route in KNOWN_ROUTES:
                ui.navigate.to(route)
            elif route:
                LOGGER.debug("No page registered for %s", route)

        def periodic_refresh() -> None:
            runtime.cache.invalidate(RESOURCE_DASHBOARD_STATS)
            runtime.refresh_dashboard()
            render.refresh()

        render()
        _fetch_after_render(runtime, DASHBOARD_RESOURCES, runtime.refresh_dashboard, render.refresh)
        interval = runtime.settings_vm.refresh_interval_s
        if interval > 0:
            ui.timer(float(interval), periodic_refresh)

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------
    @ui.page("/employees")
    def employees() -> None:
        def after_change() -> None:
            _flush_notifications(runtime)
            runtime.refresh_directory()
            render_table.refresh()

        @ui.refreshable
        def render_table() -> None:
            vm = runtime.refresh_directory(load=False)
            if vm.is_loading:
                for _ in range(vm.skeleton_count):
                    ui.skeleton().classes("w-full h-8 q-mb-xs")
                return
            rows = [asdict(row) for row in vm.rows()]
            if not rows:
                with ui.card().classes("hr-card w-full items-center"):
                    ui.label(vm.empty_message).classes("hr-muted q-pa-lg")
                return
            table = ui.table(columns=EMPLOYEE_COLUMNS, rows=rows, row_key="id").classes("w-full hr-card")
            table.add_slot(
                "body-cell-role",
                """
<q-td :props="props">
  <q-badge v-if="props.row.has_role" outline color="primary" :label="props.value" />
  <span v-else class="hr-muted">{{ props.value }}</span>
</q-td>
                """,
            )
            table.add_slot(
                "body-cell-status",
                """
<q-td :props="props">
  <q-badge :color="props.row.status_variant === 'default' ? 'primary' : 'grey-6'" :label="props.value" />
</q-td>
                """,
            )
            table.add_slot(
                "body-cell-actions",
                """
<q-td :props="props" class="text-right">
  <q-btn flat dense round icon="event_available" title="Assign Leave Quota" @click="() => $parent.$emit('quota', props.row)" />
  <q-btn flat dense round icon="edit" @click="() => $parent.$emit('edit', props.row)" />
  <q-btn flat dense round icon="delete" @click="() => $parent.$emit('delete', props.row)" />
</q-td>
                """,
            )
            table.on("quota", lambda e: open_quota_dialog(e.args["id"]))
            table.on("edit", lambda e: open_employee_dialog(e.args["id"]))
            table.on("delete", lambda e: confirm_delete(e.args["id"]))

        def open_employee_dialog(employee_id: Optional[str] = None) -> None:
            employee = runtime.directory_vm.find(employee_id) if employee_id else None
            dialog = ui.dialog()
            form = runtime.employee_form(employee, on_saved=dialog.close)
            _employee_dialog(dialog, form, on_finished=after_change)
            dialog.open()

        def open_quota_dialog(employee_id: str) -> None:
            employee = runtime.directory_vm.find(employee_id)
            if employee is None:
                return
            dialog = ui.dialog()
            quota = runtime.leave_quota_form(employee, on_done=dialog.close)
            with dialog, ui.card().classes("w-96"):
                ui.label("Assign Leave Quota").classes("text-h6")
                ui.label(quota.description).classes("hr-muted")
                ui.select(
                    quota.leave_type_options(),
                    label="Leave Type",
                    on_change=lambda e: setattr(quota, "leave_type_id", str(e.value or "")),
                ).classes("w-full")
                ui.input(
                    "Total Leaves",
                    value=quota.total_leaves,
                    on_change=lambda e: setattr(quota, "total_leaves", str(e.value or "")),
                ).classes("w-full")
                ui.input(
                    "Year",
                    value=quota.year,
                    on_change=lambda e: setattr(quota, "year", str(e.value or "")),
                ).classes("w-full")
                with ui.row().classes("w-full justify-end"):
                    ui.button("Cancel", on_click=dialog.close).props("flat")

                    def submit() -> None:
                        quota.submit()
                        _flush_notifications(runtime)

                    ui.button("Assign Quota", on_click=submit)
            dialog.open()

        async def confirm_delete(employee_id: str) -> None:
            vm = runtime.directory_vm
            employee = vm.find(employee_id)
            if employee is None:
                return
            with ui.dialog() as dialog, ui.card():
                ui.label(vm.confirm_message(employee))
                with ui.row().classes("w-full justify-end"):
                    ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
                    ui.button("Delete", color="negative", on_click=lambda: dialog.submit(True))
            confirmed = bool(await dialog)
            vm.request_delete(employee, lambda _message: confirmed)
            after_change()

        @ui.refreshable
        def render_page() -> None:
            vm = runtime.refresh_directory(load=False)
            with ui.column().classes("hr-page"):
                _page_frame(runtime, "Employee Management", "Manage employee profiles and access")
                if vm.is_loading_user:
                    ui.skeleton().classes("w-full h-10")
                    return
                if vm.access_denied:
                    with ui.card().classes("hr-card w-full items-center"):
                        ui.label(vm.access_denied_message).classes("hr-muted text-h6 q-pa-lg")
                    return
                with ui.row().classes("w-full justify-between items-center"):
                    ui.input(
                        placeholder="Search employees...",
                        value=vm.query,
                        on_change=lambda e: (vm.set_query(e.value), render_table.refresh()),
                    ).props("outlined dense clearable").classes("w-80")
                    ui.button("Add Employee", icon="add", on_click=lambda: open_employee_dialog())
                render_table()

        render_page()
        _fetch_after_render(runtime, DIRECTORY_RESOURCES, runtime.refresh_directory, render_page.refresh)

    # ------------------------------------------------------------------
    # Holidays
    # ------------------------------------------------------------------
    @ui.page("/holidays")
    def holidays() -> None:
        vm = runtime.refresh_holidays(load=False)

        def redraw() -> None:
            render_list.refresh()
            render_month.refresh()
            render_year.refresh()

        def after_change() -> None:
            _flush_notifications(runtime)
            runtime.refresh_holidays()
            redraw()

        def open_holiday_dialog() -> None:
            dialog = ui.dialog()
            form = runtime.holiday_form(on_saved=dialog.close)
            _holiday_dialog(dialog, form, on_finished=after_change)
            dialog.open()

        @ui.refreshable
        def render_list() -> None:
            if vm.is_loading:
                for _ in range(vm.skeleton_count):
                    ui.skeleton().classes("w-full h-8 q-mb-xs")
                return
            rows = [asdict(row) for row in vm.rows()]
            if not rows:
                ui.label(vm.empty_message).classes("hr-muted q-pa-lg")
                return
            table = ui.table(columns=HOLIDAY_COLUMNS, rows=rows, row_key="id").classes("w-full")
            if vm.show_mutation_controls(runtime.current_user()):
                table.add_slot(
                    "body-cell-actions",
                    """
<q-td :props="props" class="text-right">
  <q-btn flat dense round icon="edit" @click="() => $parent.$emit('edit', props.row)" />
  <q-btn flat dense round icon="delete" @click="() => $parent.$emit('delete', props.row)" />
</q-td>
                    """,
                )
                table.on("edit", lambda e: vm.on_edit_row(e.args["id"]))
                table.on("delete", lambda e: vm.on_delete_row(e.args["id"]))

        @ui.refreshable
        def render_month() -> None:
            with ui.row().classes("q-gutter-md items-center"):
                ui.select(
                    {index: name for index, name in enumerate(MONTH_NAMES, start=1)},
                    value=vm.selected_month,
                    label="Month",
                    on_change=lambda e: (vm.set_month(e.value), render_month.refresh()),
                ).classes("w-40")
                ui.select(
                    vm.year_options(),
                    value=vm.selected_year,
                    label="Year",
                    on_change=lambda e: (vm.set_year(e.value), render_month.refresh(), render_year.refresh()),
                ).classes("w-32")
            with ui.row().classes("w-full q-gutter-md"):
                calendar = ui.date().props("minimal")
                calendar._props["events"] = sorted(d.strftime("%Y/%m/%d") for d in vm.highlighted_dates())
                calendar._props["default-year-month"] = f"{vm.selected_year}/{vm.selected_month:02d}"
                with ui.card().classes("hr-card col"):
                    ui.label(f"Holidays in {vm.month_title()}").classes("text-h6")
                    month_holidays = vm.month_holidays()
                    if not month_holidays:
                        ui.label(vm.empty_month_message).classes("hr-muted")
                    for holiday in month_holidays:
                        with ui.row().classes("w-full justify-between items-center"):
                            with ui.column().classes("gap-0"):
                                ui.label(holiday.name).classes("text-subtitle1")
                                ui.label(format_range(holiday)).classes("hr-muted text-caption")
                            ui.badge(f"{days_label(holiday.total_holidays)} · {holiday.holiday_type}")

        @ui.refreshable
        def render_year() -> None:
            ui.label(vm.year_total_label()).classes("text-subtitle1 q-mb-sm")
            with ui.grid(columns=4).classes("w-full"):
                for summary in vm.yearly_overview():
                    with ui.card().classes("hr-card"):
                        with ui.row().classes("w-full justify-between"):
                            ui.label(summary.name).classes("text-subtitle1")
                            if summary.holidays:
                                ui.badge(days_label(summary.total_days))
                        if not summary.holidays:
                            ui.label("No holidays").classes("hr-muted text-caption")
                        for holiday in summary.holidays:
                            ui.label(f"{holiday.name} ({format_compact_range(holiday)})").classes("text-caption")

        with ui.column().classes("hr-page"):
            _page_frame(runtime, "Holiday Management", "Manage company holidays and calendars")
            if vm.show_mutation_controls(runtime.current_user()):
                ui.button("Add Holiday", icon="add", on_click=open_holiday_dialog)
            with ui.tabs() as tabs:
                tab_list = ui.tab("List View")
                tab_month = ui.tab("Monthly Calendar")
                tab_year = ui.tab("Yearly Overview")
            with ui.tab_panels(tabs, value=tab_list).classes("w-full hr-card"):
                with ui.tab_panel(tab_list):
                    render_list()
                with ui.tab_panel(tab_month):
                    render_month()
                with ui.tab_panel(tab_year):
                    render_year()
        _fetch_after_render(runtime, HOLIDAY_RESOURCES, runtime.refresh_holidays, redraw)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    @ui.page("/settings")
    def settings() -> None:
        values: Dict[str, Any] = dict(runtime.settings_payload())

        def save() -> None:
            try:
                runtime.apply_settings_payload(values)
            except (ValueError, OSError) as exc:
                _notify_error(exc)
                return
            ui.notify("Settings saved.", type="positive")

        def use_demo() -> None:
            runtime.enable_demo()
            ui.notify("Switched to demo data.", type="info")

        def bind(key: str, cast: Callable[[Any], Any] = str) -> Callable[[Any], None]:
            return lambda e: values.__setitem__(key, cast(e.value) if e.value is not None else "")

        with ui.column().classes("hr-page"):
            _page_frame(runtime, "Settings", "API connection and diagnostics")
            with ui.card().classes("hr-card w-full q-gutter-sm"):
                ui.input("API base URL", value=values["api_base_url"], on_change=bind("api_base_url")).classes("w-full")
                ui.input(
                    "Session cookie (connect.sid)",
                    value=values["session_cookie"],
                    password=True,
                    password_toggle_button=True,
                    on_change=bind("session_cookie"),
                ).classes("w-full")
                with ui.row().classes("q-gutter-md"):
                    ui.number("Request timeout (s)", value=values["request_timeout_s"], min=1, on_change=bind("request_timeout_s", int))
                    ui.number("Read retries", value=values["read_retries"], min=0, on_change=bind("read_retries", int))
                    ui.number("Dashboard refresh (s)", value=values["refresh_interval_s"], min=0, on_change=bind("refresh_interval_s", int))
                ui.checkbox("Debug logging", value=values["debug_logging"], on_change=bind("debug_logging", bool))
                with ui.row().classes("q-gutter-sm"):
                    ui.button("Save", on_click=save, color="primary")
                    ui.button("Use demo data", on_click=use_demo).props("flat")


def _employee_dialog(dialog: ui.dialog, form: EmployeeFormVM, *, on_finished: Callable[[], None]) -> None:
    options: Dict[str, Any] = {name: list(choices) for name, choices in SELECT_OPTIONS.items()}
    options["insuranceOpted"] = dict(INSURANCE_OPTIONS)

    @ui.refreshable
    def render_errors() -> None:
        for name, message in form.errors.items():
            ui.label(f"{name}: {message}").classes("text-negative text-caption")

    def submit() -> None:
        form.submit()
        render_errors.refresh()
        on_finished()

    with dialog, ui.card().classes("w-[760px] max-w-full"):
        ui.label(form.title).classes("text-h6")
        with ui.grid(columns=3).classes("w-full"):
            for name, label in EMPLOYEE_INPUTS:
                on_change = lambda e, n=name: form.set_field(n, e.value)
                if name in options:
                    ui.select(options[name], value=form.selected_option(name), label=label, on_change=on_change)
                else:
                    ui.input(label, value=form.fields[name], password=name == "password", on_change=on_change)
        with ui.row().classes("items-center q-gutter-md"):

            @ui.refreshable
            def render_photo() -> None:
                if form.fields["photo"]:
                    ui.image(form.fields["photo"]).classes("w-16 h-16 rounded-full")

            def on_photo(event: Any) -> None:
                form.set_photo(event.content.read(), event.type)
                render_photo.refresh()

            render_photo()
            ui.upload(label="Profile Photo", on_upload=on_photo, auto_upload=True).props("accept=image/*")
        render_errors()
        with ui.row().classes("w-full justify-end"):
            ui.button("Cancel", on_click=dialog.close).props("flat")
            ui.button("Update Employee" if form.is_edit else "Create Employee", on_click=submit)


def _holiday_dialog(dialog: ui.dialog, form: HolidayFormVM, *, on_finished: Callable[[], None]) -> None:
    @ui.refreshable
    def render_errors() -> None:
        for message in form.errors.values():
            ui.label(message).classes("text-negative text-caption")

    def submit() -> None:
        form.submit()
        render_errors.refresh()
        on_finished()

    with dialog, ui.card().classes("w-96"):
        ui.label("Edit Holiday" if form.is_edit else "Add Holiday").classes("text-h6")
        ui.input("Holiday Name *", value=form.fields["name"], on_change=lambda e: form.set_field("name", e.value)).classes("w-full")
        ui.input("From Date * (YYYY-MM-DD)", value=form.fields["fromDate"], on_change=lambda e: form.set_field("fromDate", e.value)).classes("w-full")
        ui.input("To Date * (YYYY-MM-DD)", value=form.fields["toDate"], on_change=lambda e: form.set_field("toDate", e.value)).classes("w-full")
        ui.input("Total Holidays *", value=form.fields["totalHolidays"], on_change=lambda e: form.set_field("totalHolidays", e.value)).classes("w-full")
        ui.select(list(HOLIDAY_TYPES), value=form.fields["type"], label="Holiday Type *", on_change=lambda e: form.set_field("type", e.value)).classes("w-full")
        render_errors()
        with ui.row().classes("w-full justify-end"):
            ui.button("Cancel", on_click=dialog.close).props("flat")
            ui.button("Update Holiday" if form.is_edit else "Create Holiday", on_click=submit)


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web UI startup."""
    parser = argparse.ArgumentParser(description="Run the hrdesk NiceGUI web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--demo", action="store_true", help="serve in-memory demo data instead of the HR API")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI web UI."""
    args = _parse_args()
    configure_root()
    runtime = WebRuntime()
    if args.demo:
        runtime.enable_demo()
    if args.smoke_test:
        vm = runtime.refresh_dashboard()
        print("web-smoke-ok", [card.title for card in vm.cards()])
        return
    _install_theme()
    _build_ui(runtime)
    ui.run(
        host=args.host,
        port=args.port,
        title="HR Desk",
        reload=args.reload,
        show=False,
    )


if __name__ == "__main__":
    main()
