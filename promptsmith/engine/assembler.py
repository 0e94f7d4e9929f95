"""Prompt Assembler - renders the final instruction text.

Layout (blocks separated by one blank line, absent blocks omitted):

    Persona: ...
    Audience: ...
    Tone: ...

    ## <section label>
    <trimmed section value>

    ## Guardrails
    - ...

    ## Success Criteria
    - ...

    ## Response Format
    ...
"""

import re
from collections.abc import Sequence
from typing import Final

from promptsmith.builder.state import BuilderOptions, SectionState, ordered_unique

_BLANK_LINES: Final = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")
_TRAILING_SPACE: Final = re.compile(r"[ \t]+$", re.MULTILINE)


def normalize_block(text: str) -> str:
    """Trim, drop trailing spaces and collapse runs of blank lines to one.

    Examples:
        >>> normalize_block("  a  \\n\\n\\n\\nb ")
        'a\\n\\nb'
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _TRAILING_SPACE.sub("", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


def _bullets(heading: str, items: Sequence[str]) -> str:
    lines = [f"## {heading}"]
    lines.extend(f"- {normalize_block(item)}" for item in items)
    return "\n".join(lines)


def assemble_prompt(sections: Sequence[SectionState], options: BuilderOptions) -> str:
    """Render sections and options into one instruction text.

    Never raises on well-shaped input; an empty draft with empty options
    renders as an empty string.

    Args:
        sections: Sections in display order
        options: Builder options supplying the persona, audience, tone,
            guardrails, success criteria and response format

    Returns:
        The assembled prompt
    """
    blocks: list[str] = []

    header = [
        f"{name}: {normalize_block(value)}"
        for name, value in (
            ("Persona", options.persona),
            ("Audience", options.target_audience),
            ("Tone", options.tone),
        )
        if value.strip()
    ]
    if header:
        blocks.append("\n".join(header))

    for section in sections:
        value = normalize_block(section.value)
        if value:
            blocks.append(f"## {section.label.strip()}\n{value}")

    guardrails = ordered_unique(options.guardrails)
    if guardrails:
        blocks.append(_bullets("Guardrails", guardrails))

    criteria = ordered_unique(options.success_criteria)
    if criteria:
        blocks.append(_bullets("Success Criteria", criteria))

    response_format = normalize_block(options.response_format)
    if response_format:
        blocks.append(f"## Response Format\n{response_format}")

    return "\n\n".join(blocks)
