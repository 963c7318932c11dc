"""Preview command resolution and rendering.

Three sources, lowest precedence first: the global preview from the config
file, the entry's own preview, and the caller's command-line overrides.
``running`` and ``not_running`` are resolved independently, so overriding
one never discards the other.
"""

from dataclasses import replace

from sessionizer.models.session_models import PreviewCommands, PromptItem


def resolve_preview(
    global_preview: PreviewCommands | None,
    entry_preview: PreviewCommands | None,
    override: PreviewCommands | None,
) -> PreviewCommands | None:
    """Resolve the effective preview pair field by field.

    Args:
        global_preview: Config-file level defaults
        entry_preview: Preview declared on the configuration entry
        override: Caller-supplied overrides

    Returns:
        Resolved PreviewCommands, or None when neither field is set
    """
    layers = [layer for layer in (override, entry_preview, global_preview) if layer is not None]

    running = next((layer.running for layer in layers if layer.running is not None), None)
    not_running = next(
        (layer.not_running for layer in layers if layer.not_running is not None), None
    )

    resolved = PreviewCommands(running=running, not_running=not_running)
    return None if resolved.is_empty else resolved


def apply_preview(
    item: PromptItem,
    global_preview: PreviewCommands | None,
    override: PreviewCommands | None,
) -> PromptItem:
    """Return ``item`` with its entry preview replaced by the resolved one."""
    return replace(item, preview=resolve_preview(global_preview, item.preview, override))


def render_template(template: str, item: PromptItem) -> str:
    """Substitute ``{{workdir}}`` and ``{{name}}`` in a template."""
    return template.replace("{{workdir}}", item.workdir.path).replace("{{name}}", item.name)


def preview_command(item: PromptItem) -> str | None:
    """Pick and render the preview command for display.

    Uses ``running`` when the candidate has a live session and
    ``not_running`` otherwise.

    Returns:
        Rendered command, or None when the preview area stays empty
    """
    if item.preview is None:
        return None

    template = item.preview.running if item.is_running else item.preview.not_running
    if template is None:
        return None
    return render_template(template, item)


__all__ = ["apply_preview", "preview_command", "render_template", "resolve_preview"]
