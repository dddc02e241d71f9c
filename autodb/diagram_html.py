from html import escape

from autodb.diagram import DiagramCard, DiagramDescriptor, DiagramEdge

# Dark theme header colours, cycled per card
COLORS = [
    {"bg": "#ff6b2c", "text": "#ffffff"},  # Orange
    {"bg": "#3b82f6", "text": "#ffffff"},  # Blue
    {"bg": "#8b5cf6", "text": "#ffffff"},  # Purple
    {"bg": "#14b8a6", "text": "#ffffff"},  # Teal
    {"bg": "#ec4899", "text": "#ffffff"},  # Pink
    {"bg": "#f59e0b", "text": "#ffffff"},  # Amber
]

STYLE = """
<style>
    .erd { font-family: 'Inter', system-ui, sans-serif; color: #e2e8f0; background: #0a0a0f; padding: 16px; }
    .erd-cards { display: flex; flex-wrap: wrap; gap: 24px; justify-content: center; align-items: flex-start; }
    .erd-card { background: #1a1a25; border-radius: 12px; min-width: 240px; max-width: 320px; overflow: hidden; }
    .erd-card-title { padding: 10px 14px; font-weight: 700; display: flex; justify-content: space-between; }
    .erd-card-title small { font-size: 10px; opacity: 0.8; }
    .erd-row { display: flex; justify-content: space-between; padding: 6px 14px; font-size: 13px; border-bottom: 1px solid #2a2a3a; }
    .erd-row .type { font-family: monospace; font-size: 11px; color: #6b7280; text-transform: uppercase; }
    .erd-row .pk { color: #eab308; font-size: 11px; margin-right: 6px; }
    .erd-row .fk { color: #a855f7; font-size: 11px; margin-right: 6px; }
    .erd-card-subtitle { padding: 8px 14px; font-size: 12px; font-style: italic; color: #6b7280; text-align: center; }
    .erd-matrix { margin-top: 32px; padding-top: 16px; border-top: 1px dashed #2a2a3a; }
    .erd-matrix h3 { font-size: 12px; text-transform: uppercase; letter-spacing: 0.05em; color: #6b7280; }
    .erd-edges { display: grid; grid-template-columns: repeat(auto-fill, minmax(280px, 1fr)); gap: 12px; }
    .erd-edge { display: flex; justify-content: space-between; align-items: center; padding: 12px; border: 1px solid #2a2a3a; border-radius: 8px; }
    .erd-edge .end { font-weight: 600; color: #93c5fd; }
    .erd-edge .mid { display: flex; flex-direction: column; align-items: center; font-size: 10px; color: #6b7280; }
    .erd-edge .mid .line { width: 64px; height: 1px; background: #ff6b2c; margin: 4px 0; }
</style>
"""


def card_to_html(card: DiagramCard, index: int) -> str:
    color = COLORS[index % len(COLORS)]

    rows = []
    for row in card.rows:
        badges = ""
        if row.primary_key:
            badges += '<span class="pk" title="Primary Key">PK</span>'
        if row.foreign_key:
            badges += '<span class="fk" title="Foreign Key">FK</span>'
        rows.append(
            f'<div class="erd-row"><span>{badges}{escape(row.name)}</span>'
            f'<span class="type">{escape(row.type)}</span></div>'
        )

    return (
        f'<div class="erd-card" style="border: 2px solid {color["bg"]}">'
        f'<div class="erd-card-title" style="background: {color["bg"]}; color: {color["text"]}">'
        f'<span>{escape(card.title)}</span><small>TABLE</small></div>'
        f'{"".join(rows)}'
        f'<div class="erd-card-subtitle">{escape(card.subtitle)}</div>'
        f'</div>'
    )


def edge_to_html(edge: DiagramEdge) -> str:
    return (
        f'<div class="erd-edge">'
        f'<span class="end">{escape(edge.source)}</span>'
        f'<span class="mid"><span>{escape(edge.type)}</span><span class="line"></span>'
        f'<em>{escape(edge.label)}</em></span>'
        f'<span class="end">{escape(edge.target)}</span>'
        f'</div>'
    )


def diagram_to_html(diagram: DiagramDescriptor) -> str:
    """Render a diagram descriptor as entity cards plus a relationship matrix"""
    if diagram.is_empty:
        return ""

    cards = "".join(card_to_html(card, i) for i, card in enumerate(diagram.cards))

    matrix = ""
    if diagram.edges:
        edges = "".join(edge_to_html(edge) for edge in diagram.edges)
        matrix = (
            '<div class="erd-matrix"><h3>Relationships Matrix</h3>'
            f'<div class="erd-edges">{edges}</div></div>'
        )

    return f'{STYLE}<div class="erd"><div class="erd-cards">{cards}</div>{matrix}</div>'
