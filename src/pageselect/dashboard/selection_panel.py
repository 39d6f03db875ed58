"""Selection header: selected-count summary, clear button and custom "select first N"."""

from __future__ import annotations

import panel as pn

from .state import MAX_CUSTOM_SELECT, TableState


class CustomSelectionPanel:
    """Collapsible form asking how many rows to select from the top."""

    def __init__(self, state: TableState) -> None:
        self.state = state

        self.toggle_button = pn.widgets.Button(
            name="Custom Select", button_type="default", width=130,
        )
        self.count_input = pn.widgets.IntInput(
            name="Number of rows to select:",
            value=None,
            start=1,
            end=MAX_CUSTOM_SELECT,
            width=200,
        )
        self.submit_button = pn.widgets.Button(name="Submit", button_type="primary", width=90)
        self.cancel_button = pn.widgets.Button(name="Cancel", width=90)
        self.form = pn.Column(
            self.count_input,
            pn.Row(self.submit_button, self.cancel_button),
            visible=False,
        )

        self.toggle_button.on_click(self._on_toggle)
        self.submit_button.on_click(self._on_submit)
        self.cancel_button.on_click(self._on_cancel)

    def _on_toggle(self, event) -> None:
        self.form.visible = not self.form.visible

    def _on_submit(self, event) -> None:
        value = self.count_input.value
        if value is None or value < 1:
            self.state.custom_select(None)
            return
        self.state.custom_select(value)
        self._close()

    def _on_cancel(self, event) -> None:
        self._close()

    def _close(self) -> None:
        self.count_input.value = None
        self.form.visible = False

    def build_panel(self) -> pn.Column:
        return pn.Column(self.toggle_button, self.form)


class SelectionHeader:
    """Selected-row count with a Clear Selection button shown when it is non-zero."""

    def __init__(self, state: TableState) -> None:
        self.state = state
        self.summary = pn.pane.Markdown("", margin=(8, 10))
        self.clear_button = pn.widgets.Button(
            name="Clear Selection", button_type="danger", width=130, visible=False,
        )
        self.status_text = pn.pane.Markdown(
            "", styles={"color": "#6b7280", "font-size": "11px", "font-style": "italic"},
            sizing_mode="stretch_width",
        )
        self.custom_panel = CustomSelectionPanel(state)

        self.clear_button.on_click(lambda event: self.state.clear_selection())
        state.param.watch(self._sync_count, "selected_count")
        state.param.watch(self._sync_status, "status_text")
        self._sync_count()

    def _sync_count(self, *events) -> None:
        n = self.state.selected_count
        self.summary.object = f"**Selected:** {n} rows"
        self.clear_button.visible = n > 0

    def _sync_status(self, event) -> None:
        self.status_text.object = event.new

    def build_panel(self) -> pn.Column:
        return pn.Column(
            pn.Row(
                self.summary,
                self.clear_button,
                pn.layout.HSpacer(),
                self.custom_panel.build_panel(),
                sizing_mode="stretch_width",
            ),
            self.status_text,
            sizing_mode="stretch_width",
        )
