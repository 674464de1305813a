"""Shopping list template generation.

Creates markdown shopping list files with checkboxes.
"""

import re


def slugify(text: str) -> str:
    """Convert text to slug format."""
    return re.sub(r'[^a-z0-9]+', '-', text.lower()).strip('-')


def generate_shopping_list_markdown(
    title: str,
    items: list[str],
    checked: list[str] = (),
    recipes: list[str] = (),
) -> str:
    """Generate shopping list markdown.

    Args:
        title: List title like 'Sunday Dinner'
        items: Formatted ingredient strings still to buy
        checked: Items already bought (rendered as ticked boxes)
        recipes: Recipe titles the list was generated from

    Returns:
        Formatted markdown string
    """
    lines = [
        f"# Shopping List - {title}",
        "",
    ]

    if recipes:
        lines.append("Generated from " + ", ".join(recipes))
        lines.append("")

    lines.extend([
        "## Items",
        "",
    ])

    # Add checklist items
    for item in items:
        lines.append(f"- [ ] {item}")
    for item in checked:
        lines.append(f"- [x] {item}")

    lines.append("")

    return '\n'.join(lines)


def generate_filename(title: str) -> str:
    """Generate filename for shopping list.

    Args:
        title: List title like 'Sunday Dinner'

    Returns:
        Filename like 'sunday-dinner.md'
    """
    return f"{slugify(title) or 'shopping-list'}.md"
