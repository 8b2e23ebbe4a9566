"""Render the wizard state as :mod:`rich` renderables."""
from __future__ import annotations

from typing import List, Optional

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from .colors import PREDEFINED_COLORS, color_to_hex, palette_name
from .config import StyleConfig
from .filepicker import FilePicker
from .forms import TemplateWizard, WiFiForm
from .state import FORMATS, TOTAL_VISIBLE_STEPS, ColorChoice, Step, WizardState, display_number
from .templates import AVAILABLE_TYPES, WIFI_ENCRYPTION_TYPES
from .textfield import TextField
from .wizard import Wizard

HELP_TEXT = {
    Step.CONTENT_TYPE: "↑/↓: Select • Enter/Space: Confirm • Ctrl+C: Quit",
    Step.URL: "Enter: Confirm • Esc: Back • Ctrl+C: Quit",
    Step.TEMPLATE: "Tab/↓: Next field • Shift+Tab/↑: Prev • Enter: Confirm • Esc: Back • Ctrl+C: Quit",
    Step.FORMAT: "←/→: Select • Enter/Space: Confirm • Esc: Back • Ctrl+C: Quit",
    Step.SIZE: "Enter: Confirm • Esc: Back • Ctrl+C: Quit",
    Step.CONFIRM: "Y/Enter: Generate • N: Start over • Esc: Previous step • Ctrl+C: Quit",
    Step.COMPLETE: "R: Create another • Q/Enter: Exit",
}
PALETTE_HELP = "↑/↓: Select • Enter/Space: Confirm • C: Custom color • Esc: Back • Ctrl+C: Quit"
CUSTOM_COLOR_HELP = "Enter: Confirm • Esc: Cancel custom color • Ctrl+C: Quit"
OUTPUT_HELP = "Enter: Confirm • Tab: Browse files • Esc: Back • Ctrl+C: Quit"
BROWSER_HELP = (
    "↑/↓: Navigate • Enter: Open/Select • N: New filename • ~: Home • "
    "Tab: Manual input • Ctrl+C: Quit"
)
NAME_HELP = "Enter: Confirm • Esc: Back to browsing • Ctrl+C: Quit"


def truncate(text: str, limit: int = 40) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class WizardView:
    """Build the screen for the current wizard step."""

    def __init__(self, style: Optional[StyleConfig] = None):
        self.style = style or StyleConfig()

    # helpers ----------------------------------------------------------
    def header(self, text: str) -> Text:
        return Text(text, style=f"bold {self.style.primary}")

    def label(self, text: str, focused: bool = False) -> Text:
        return Text(text, style=f"bold {self.style.text}" if focused else self.style.subtle)

    def option(self, text: str, active: bool) -> Text:
        if active:
            return Text(f"▸ {text}", style=f"bold {self.style.secondary}")
        return Text(f"  {text}", style=self.style.text)

    def input_line(self, field: TextField) -> Text:
        """Render a text field with its caret or placeholder."""

        line = Text("> ", style=self.style.primary if field.focused else self.style.subtle)
        if not field.value and field.placeholder:
            if field.focused and field.cursor_visible:
                line.append(field.placeholder[0], style="reverse")
                line.append(field.placeholder[1:], style=f"dim {self.style.subtle}")
            else:
                line.append(field.placeholder, style=f"dim {self.style.subtle}")
            return line

        value = field.value
        if not field.focused:
            line.append(value, style=self.style.text)
            return line
        line.append(value[: field.cursor], style=self.style.text)
        caret = value[field.cursor : field.cursor + 1] or " "
        line.append(caret, style="reverse" if field.cursor_visible else self.style.text)
        line.append(value[field.cursor + 1 :], style=self.style.text)
        return line

    def progress(self, step: Step) -> Text:
        current = display_number(step)
        bar = Text()
        for number in range(1, TOTAL_VISIBLE_STEPS + 1):
            if number < current:
                bar.append("✓", style=self.style.secondary)
            elif number == current:
                bar.append("●", style=f"bold {self.style.primary}")
            else:
                bar.append("○", style=self.style.subtle)
            if number < TOTAL_VISIBLE_STEPS:
                bar.append("───", style=self.style.secondary if number < current else self.style.subtle)
        bar.append(f"  Step {current} of {TOTAL_VISIBLE_STEPS}", style=self.style.subtle)
        return bar

    # screens ----------------------------------------------------------
    def render(self, wizard: Wizard) -> RenderableType:
        state = wizard.state
        if state.quitting:
            return Text("")

        parts: List[RenderableType] = [
            Text("  QR Code Generator  ", style=f"bold {self.style.button_text} on {self.style.primary}"),
            Text("Create beautiful QR codes from your terminal", style=f"italic {self.style.subtle}"),
            Text(""),
        ]
        if state.step is not Step.COMPLETE:
            parts.extend([self.progress(state.step), Text("")])

        parts.append(self.render_step(wizard))

        if state.error:
            parts.extend([Text(""), Text(f"⚠ {state.error}", style=f"bold {self.style.accent}")])

        parts.extend([Text(""), Text(self.help_text(state), style=f"dim {self.style.subtle}")])
        return Group(*parts)

    def render_step(self, wizard: Wizard) -> RenderableType:
        state = wizard.state
        step = state.step
        if step is Step.CONTENT_TYPE:
            return self.render_content_type(state)
        if step is Step.URL:
            return Group(
                self.header("Step 2: Enter URL or Text"),
                Text(""),
                self.label("Content:", True),
                self.input_line(state.url_input),
            )
        if step is Step.TEMPLATE:
            return self.render_template(state)
        if step is Step.FORMAT:
            return self.render_format(state)
        if step is Step.FOREGROUND:
            return self.render_color("Step 4: Foreground Color", state.foreground, wizard.colors)
        if step is Step.BACKGROUND:
            return self.render_color("Step 5: Background Color", state.background, wizard.colors)
        if step is Step.SIZE:
            return Group(
                self.header("Step 6: Set Dimensions"),
                Text(""),
                self.label("Size (64-4096 pixels):", True),
                self.input_line(state.size_input),
                Text(""),
                self.label("Leave empty for default (256px)"),
            )
        if step is Step.OUTPUT:
            return self.render_output(state)
        if step is Step.CONFIRM:
            return self.render_confirm(state)
        return self.render_complete(state)

    def render_content_type(self, state: WizardState) -> RenderableType:
        lines: List[RenderableType] = [self.header("Step 1: What do you want to encode?"), Text("")]
        for index, info in enumerate(AVAILABLE_TYPES):
            active = index == state.content_type_index
            line = self.option(f"{info.icon} {info.name}", active)
            line.append(
                f" — {info.description}",
                style=f"italic {self.style.primary if active else self.style.subtle}",
            )
            lines.append(line)
        return Group(*lines)

    def render_template(self, state: WizardState) -> RenderableType:
        info = state.content_type_info
        lines: List[RenderableType] = [
            self.header(f"Step 2: {info.icon} {info.name} Details"),
            Text(""),
        ]
        if state.template is not None:
            lines.extend(self.render_form(state.template))
        return Group(*lines)

    def render_form(self, template: TemplateWizard) -> List[RenderableType]:
        form = template.form
        lines: List[RenderableType] = []
        for index, label in enumerate(form.labels()):
            focused = index == template.focus_index
            if isinstance(form, WiFiForm) and index == form.ENCRYPTION_FIELD:
                lines.append(self.label(label, focused))
                buttons = Text("  ")
                for choice, (_encryption, name) in enumerate(WIFI_ENCRYPTION_TYPES):
                    buttons.append_text(self.button(name, choice == form.encryption_index))
                    buttons.append(" ")
                lines.extend([buttons, Text("")])
            elif isinstance(form, WiFiForm) and index == form.HIDDEN_FIELD:
                toggle = "● Yes" if form.hidden else "○ No"
                lines.append(self.label(f"{label} {toggle}", focused))
            else:
                field = form.text_input(index)
                lines.append(self.label(label, focused))
                if field is not None:
                    lines.append(self.input_line(field))
                lines.append(Text(""))
        return lines

    def button(self, text: str, active: bool) -> Text:
        if active:
            return Text(f" {text} ", style=f"bold {self.style.button_text} on {self.style.primary}")
        return Text(f" {text} ", style=f"{self.style.text} on {self.style.background}")

    def render_format(self, state: WizardState) -> RenderableType:
        buttons = Text("  ")
        for index, fmt in enumerate(FORMATS):
            buttons.append_text(self.button(fmt.value.upper(), index == state.format_index))
            buttons.append("    ")
        return Group(
            self.header("Step 3: Choose Output Format"),
            Text(""),
            buttons,
            Text(""),
            self.label("PNG: Raster image, best for most uses"),
            self.label("SVG: Vector format, scales infinitely"),
        )

    def render_color(self, title: str, choice: ColorChoice, names: List[str]) -> RenderableType:
        lines: List[RenderableType] = [self.header(title), Text("")]
        if choice.custom:
            lines.extend(
                [
                    self.label("Enter hex color:", True),
                    self.input_line(choice.input),
                    Text(""),
                    self.label("Press ESC to go back to color selection"),
                ]
            )
            return Group(*lines)

        for index, name in enumerate(names):
            active = index == choice.index
            line = Text("▸ " if active else "  ", style=self.style.secondary)
            line.append("  ", style=f"on {color_to_hex(PREDEFINED_COLORS[name])}")
            line.append(f" {name}", style=f"bold {self.style.secondary}" if active else self.style.text)
            lines.append(line)
        lines.extend([Text(""), self.label("Press 'c' for custom hex color")])
        return Group(*lines)

    def render_output(self, state: WizardState) -> RenderableType:
        lines: List[RenderableType] = [self.header("Step 7: Output Location"), Text("")]
        if state.browser_active:
            lines.extend(self.render_picker(state.picker))
            return Group(*lines)
        lines.extend(
            [
                self.label("Filename or path:", True),
                self.input_line(state.output_input),
                Text(""),
                self.label("Leave empty for 'qrcode' in current directory"),
                self.label("Use ~ for home directory, e.g., ~/Downloads/myqr"),
                Text(""),
                self.label("Press Tab to browse files"),
            ]
        )
        return Group(*lines)

    def render_picker(self, picker: FilePicker) -> List[RenderableType]:
        lines: List[RenderableType] = [self.label(f"📂 {picker.display_dir()}", True), Text("")]
        if picker.name_mode:
            lines.extend(
                [
                    self.label("Filename:", True),
                    self.input_line(picker.name_input),
                    Text(""),
                    self.label("Press Esc to go back to browsing"),
                ]
            )
            return lines

        if picker.error:
            lines.extend(
                [
                    Text(f"⚠ Cannot read directory: {picker.error}", style=self.style.accent),
                    Text(""),
                    self.label("Press Backspace to go to parent directory"),
                ]
            )
            return lines

        if not picker.entries:
            lines.append(self.label("  (empty directory)"))
            return lines

        start, end = picker.visible_range()
        if start > 0:
            lines.append(self.label("  ↑ more items above"))
        for index in range(start, end):
            entry = picker.entries[index]
            if entry.is_parent:
                icon = "⬆ "
            elif entry.is_dir:
                icon = "📁"
            else:
                icon = "📄"
            lines.append(self.option(f"{icon} {entry.name}", index == picker.cursor))
        if end < len(picker.entries):
            lines.append(self.label("  ↓ more items below"))
        return lines

    def summary(self, state: WizardState) -> Text:
        draft = state.draft
        info = state.content_type_info
        lines = [
            f"📋 Type:     {info.icon} {info.name}",
            f"📝 Content:  {truncate(draft.content)}",
            f"📄 Format:   {draft.format.value.upper()}",
            f"🎨 FG Color: {palette_name(draft.foreground)} ({color_to_hex(draft.foreground)})",
            f"🖼️  BG Color: {palette_name(draft.background)} ({color_to_hex(draft.background)})",
            f"📐 Size:     {draft.size}x{draft.size} pixels",
            f"💾 Output:   {truncate(draft.output_path)}",
        ]
        return Text("\n".join(lines), style=self.style.text)

    def render_confirm(self, state: WizardState) -> RenderableType:
        prompt = Text("Generate QR code? ", style=f"bold {self.style.primary}")
        prompt.append("[Y/Enter] Yes  [N] Start over", style=self.style.subtle)
        return Group(
            self.header("Step 8: Review & Generate"),
            Text(""),
            Panel(self.summary(state), border_style=self.style.primary, expand=False),
            Text(""),
            prompt,
        )

    def render_complete(self, state: WizardState) -> RenderableType:
        lines: List[RenderableType] = [
            Panel(
                Text(
                    f"✓ QR code generated successfully!\n\nSaved to:\n{state.success_path}",
                    style=f"bold {self.style.secondary}",
                ),
                border_style=self.style.secondary,
                expand=False,
            )
        ]
        if state.preview:
            lines.extend(
                [
                    Text(""),
                    self.header("Scan with your phone:"),
                    Text(""),
                    Text.from_ansi(state.preview),
                ]
            )
        lines.extend([Text(""), self.label("Press [R] to create another, [Q/Enter] to exit")])
        return Group(*lines)

    def help_text(self, state: WizardState) -> str:
        step = state.step
        if step is Step.FOREGROUND:
            return CUSTOM_COLOR_HELP if state.foreground.custom else PALETTE_HELP
        if step is Step.BACKGROUND:
            return CUSTOM_COLOR_HELP if state.background.custom else PALETTE_HELP
        if step is Step.OUTPUT:
            if not state.browser_active:
                return OUTPUT_HELP
            return NAME_HELP if state.picker.name_mode else BROWSER_HELP
        return HELP_TEXT[step]


__all__ = ["WizardView", "truncate"]
