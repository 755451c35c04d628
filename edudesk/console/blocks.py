# edudesk/console/blocks.py - JSON building blocks every page renders into
from typing import Any, Dict, List, Optional

from edudesk.console.stats import NO_DATA


def text(content: str) -> Dict[str, Any]:
    """Create a text block"""
    return {
        "type": "text",
        "text": content
    }

def heading(title: str, subtitle: Optional[str] = None) -> Dict[str, Any]:
    block = {
        "type": "heading",
        "title": title
    }
    if subtitle:
        block["subtitle"] = subtitle
    return block

def kpis(items: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Create a KPIs block with metric cards"""
    return {
        "type": "kpis",
        "items": items
    }

def count_kpi(label: str, value: int, variant: str = "primary", action: Optional[Dict] = None) -> Dict[str, Any]:
    """Helper to create a count KPI item"""
    kpi = {
        "label": label,
        "value": value,
        "format": "integer",
        "variant": variant
    }
    if action:
        kpi["action"] = action
    return kpi

def value_kpi(label: str, value: Optional[str], variant: str = "primary") -> Dict[str, Any]:
    """KPI item for pre-formatted values (averages, rates); None shows as N/A"""
    return {
        "label": label,
        "value": value if value not in (None, "") else NO_DATA,
        "format": "text",
        "variant": variant
    }

def column(key: str, label: str, sortable: bool = True, align: str = "left") -> Dict[str, Any]:
    return {
        "key": key,
        "label": label,
        "sortable": sortable,
        "align": align
    }

def status_column(key: str, label: str, status_map: Dict[str, str],
                  sortable: bool = True, align: str = "center") -> Dict[str, Any]:
    """Helper to create a status badge column"""
    return {
        "key": key,
        "label": label,
        "sortable": sortable,
        "align": align,
        "badge": {
            "map": status_map
        }
    }

def table(title: str, columns: List[Dict], rows: List[Dict],
          actions: Optional[List] = None, search: Optional[Dict] = None) -> Dict[str, Any]:
    """Create a table block"""
    config = {
        "title": title,
        "columns": columns,
        "rows": rows
    }

    if actions:
        config["actions"] = actions
    if search is not None:
        config["search"] = search

    return {
        "type": "table",
        "config": config
    }

def action_row(row_data: Dict, actions: List[Dict]) -> Dict[str, Any]:
    """Helper to attach per-row actions (edit, delete, enroll) to a table row"""
    row_with_action = row_data.copy()
    row_with_action["_actions"] = actions
    return row_with_action

def chart_xy(title: str, chart_type: str, x_field: str, y_field: str,
             series: List[Dict], options: Optional[Dict] = None) -> Dict[str, Any]:
    """Create a bar/line/area chart block"""
    config = {
        "title": title,
        "chartType": chart_type,
        "xField": x_field,
        "yField": y_field,
        "series": series
    }

    if options:
        config["options"] = options

    return {
        "type": "chart",
        "config": config
    }

def chart_pie(title: str, label_field: str, value_field: str,
              data: List[Dict], options: Optional[Dict] = None) -> Dict[str, Any]:
    """Create a pie chart block"""
    config = {
        "title": title,
        "chartType": "pie",
        "labelField": label_field,
        "valueField": value_field,
        "data": data
    }

    if options:
        config["options"] = options

    return {
        "type": "chart",
        "config": config
    }

def form(name: str, title: str, fields: List[Dict], *, submit_label: str = "Save",
         can_submit: bool = True, submitting: bool = False, error: Optional[str] = None,
         description: Optional[str] = None) -> Dict[str, Any]:
    """Create a dialog form block bound to a named form flow"""
    config = {
        "name": name,
        "title": title,
        "fields": fields,
        "submit": {
            "label": "Saving..." if submitting else submit_label,
            "disabled": submitting or not can_submit,
            "action": ui_action("submit", {"form": name})
        },
        "cancel": {
            "label": "Cancel",
            "disabled": submitting,
            "action": ui_action("cancel", {"form": name})
        }
    }
    if description:
        config["description"] = description
    if error:
        config["error"] = error
    return {
        "type": "form",
        "config": config
    }

def form_field(key: str, label: str, field_type: str, value: Any = None, required: bool = False,
               options: Optional[List] = None, disabled: bool = False,
               placeholder: Optional[str] = None) -> Dict[str, Any]:
    """Helper to create a form field"""
    field = {
        "key": key,
        "label": label,
        "type": field_type,
        "value": value,
        "required": required,
        "disabled": disabled
    }
    if options is not None:
        field["options"] = options
    if placeholder:
        field["placeholder"] = placeholder
    return field

def option(value: Any, label: str, disabled: bool = False) -> Dict[str, Any]:
    item = {"value": value, "label": label}
    if disabled:
        item["disabled"] = True
    return item

def loading_block(title: str) -> Dict[str, Any]:
    return {
        "type": "loading",
        "title": title
    }

def empty_state(title: str, hint: Optional[str] = None) -> Dict[str, Any]:
    """Create an empty state block"""
    block = {
        "type": "empty",
        "title": title
    }
    if hint:
        block["hint"] = hint
    return block

def error_block(title: str, detail: Optional[str] = None, retry: Optional[Dict] = None) -> Dict[str, Any]:
    """Create an error block"""
    block = {
        "type": "error",
        "title": title
    }
    if detail:
        block["detail"] = detail
    if retry:
        block["retry"] = retry
    return block

def notice(message: str, variant: str = "success") -> Dict[str, Any]:
    return {
        "type": "notice",
        "message": message,
        "variant": variant
    }

def button(label: str, action: Dict, variant: str = "primary", icon: Optional[str] = None,
           disabled: bool = False) -> Dict[str, Any]:
    """Create a standalone button block"""
    return {
        "type": "button",
        "button": button_item(label, action, variant=variant, icon=icon, disabled=disabled)
    }

def button_group(buttons: List[Dict], layout: str = "horizontal",
                 align: str = "left") -> Dict[str, Any]:
    """Create a group of buttons"""
    return {
        "type": "button_group",
        "buttons": buttons,
        "layout": layout,
        "align": align
    }

def button_item(label: str, action: Dict, variant: str = "primary", icon: Optional[str] = None,
                disabled: bool = False) -> Dict[str, Any]:
    """Helper to create a button item for button groups and table rows"""
    return {
        "label": label,
        "variant": variant,
        "icon": icon,
        "disabled": disabled,
        "action": action
    }

def confirmation(name: str, title: str, message: str, *, confirm_label: str = "Delete",
                 submitting: bool = False, error: Optional[str] = None) -> Dict[str, Any]:
    """Create a confirmation dialog bound to a named delete flow"""
    dialog = {
        "name": name,
        "title": title,
        "message": message,
        "confirm": button_item("Deleting..." if submitting else confirm_label,
                               ui_action("submit", {"form": name}), variant="danger",
                               disabled=submitting),
        "cancel": button_item("Cancel", ui_action("cancel", {"form": name}), variant="outline",
                              disabled=submitting)
    }
    if error:
        dialog["error"] = error
    return {
        "type": "confirmation",
        "dialog": dialog
    }

def action_panel(items: List[Dict], title: Optional[str] = None,
                 columns: int = 1) -> Dict[str, Any]:
    """Create an action panel with navigation cards"""
    return {
        "type": "action_panel",
        "title": title,
        "items": items,
        "columns": columns
    }

def action_panel_item(title: str, description: Optional[str] = None,
                      icon: Optional[str] = None, button_label: str = "Open",
                      action: Optional[Dict] = None) -> Dict[str, Any]:
    """Helper to create an action panel item"""
    return {
        "title": title,
        "description": description,
        "icon": icon,
        "button": {
            "label": button_label,
            "variant": "primary",
            "action": action or {}
        }
    }

# Common action helpers
def ui_action(action_type: str, payload: Optional[Dict] = None) -> Dict[str, Any]:
    """Action dispatched back to the active page through /console/actions"""
    return {
        "type": action_type,
        "payload": payload or {}
    }

def route_action(target: str) -> Dict[str, Any]:
    """Create a route navigation action"""
    return ui_action("navigate", {"target": target})
