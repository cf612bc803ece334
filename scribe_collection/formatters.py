"""Format collection views as markdown for terminals and LLM consumption."""

from .schemas.document import CollectionView, DocumentCard, EmbedWidget


def _card_lines(i: int, card: DocumentCard) -> list[str]:
    return [
        f"### {i}. {card.title}",
        f"- **By:** {card.author_name}",
        f"- **Published:** {card.published}",
        f"- **Link:** {card.url}",
        f"> {card.excerpt}",
        "",
    ]


def format_collection(view: CollectionView) -> str:
    """Format a collection page as a heading plus a numbered list."""
    lines = [f"# {view.title}\n", view.subtitle]
    if view.count_text:
        lines.append(f"_{view.count_text}_")
    lines.append("")

    if not view.cards:
        lines.append(view.empty_message)
        return "\n".join(lines)

    for i, card in enumerate(view.cards, 1):
        lines.extend(_card_lines(i, card))
    return "\n".join(lines)


def format_embed_widget(widget: EmbedWidget) -> str:
    """Format the compact embed view. Shorter than a full collection page."""
    lines = [f"## @{widget.username}", widget.count_text, ""]

    if not widget.cards:
        lines.append(widget.empty_message)
    for card in widget.cards:
        lines.append(f"- [{card.title}]({card.url}) · {card.published}")
        lines.append(f"  {card.excerpt}")

    if widget.show_view_all and widget.view_all_text:
        lines.append("")
        lines.append(f"[{widget.view_all_text}]({widget.view_all_url})")
    return "\n".join(lines)
