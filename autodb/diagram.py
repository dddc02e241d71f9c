from pydantic import BaseModel, Field

from autodb.models import Entity, Relationship, RelationshipType, SchemaDocument

# Words that conflict with Mermaid syntax
RESERVED_WORDS = ["class", "entity", "relationship"]

MERMAID_CONNECTORS = {
    RelationshipType.ONE_TO_ONE.value: "||--||",
    RelationshipType.ONE_TO_MANY.value: "||--o{",
    RelationshipType.MANY_TO_ONE.value: "}o--||",
    RelationshipType.MANY_TO_MANY.value: "}o--o{",
}


class DiagramRow(BaseModel):
    name: str
    type: str
    primary_key: bool = False
    foreign_key: bool = False


class DiagramCard(BaseModel):
    title: str
    subtitle: str = ""
    rows: list[DiagramRow] = Field(default_factory=list)


class DiagramEdge(BaseModel):
    source: str
    target: str
    type: str
    label: str


class DiagramDescriptor(BaseModel):
    """Presentation-agnostic ERD: one card per entity, one edge per relationship"""

    cards: list[DiagramCard] = Field(default_factory=list)
    edges: list[DiagramEdge] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.cards and not self.edges


def entity_to_card(entity: Entity) -> DiagramCard:
    return DiagramCard(
        title=entity.name,
        subtitle=entity.description or "",
        rows=[
            DiagramRow(
                name=field.name,
                type=field.type,
                primary_key=field.primary_key,
                foreign_key=field.foreign_key,
            )
            for field in entity.fields
        ],
    )


def relationship_to_edge(rel: Relationship) -> DiagramEdge:
    # Endpoints are not looked up, so dangling names render as-is
    return DiagramEdge(
        source=rel.from_entity,
        target=rel.to_entity,
        type=rel.type,
        label=rel.display_label,
    )


def render_diagram(schema: SchemaDocument) -> DiagramDescriptor:
    """Convert a schema to diagram cards and relationship edges"""
    return DiagramDescriptor(
        cards=[entity_to_card(entity) for entity in schema.entities],
        edges=[relationship_to_edge(rel) for rel in schema.relationships],
    )


def safe_name(name: str) -> str:
    """Make entity names safe for Mermaid"""
    if name.lower() in RESERVED_WORDS:
        return f"{name}Entity"
    return name


def schema_to_mermaid(schema: SchemaDocument) -> str:
    """Convert a schema to Mermaid ERD syntax"""
    if schema.is_empty:
        return ""

    lines = ["erDiagram"]

    # Add entities with their fields
    for entity in schema.entities:
        lines.append(f"    {safe_name(entity.name)} {{")
        for field in entity.fields:
            markers = [m for m, on in (("PK", field.primary_key), ("FK", field.foreign_key)) if on]

            # Mermaid types cannot hold punctuation or spaces
            display_type = field.type
            for char in "(), ":
                display_type = display_type.replace(char, "")

            line = f"        {display_type or 'unknown'} {field.name}"
            if markers:
                line += " " + ", ".join(markers)
            lines.append(line)
        lines.append("    }")

    lines.append("")

    # Add relationships
    for rel in schema.relationships:
        connector = MERMAID_CONNECTORS.get(rel.type, "||--||")
        label = rel.display_label.replace('"', "'")
        lines.append(
            f'    {safe_name(rel.from_entity)} {connector} {safe_name(rel.to_entity)} : "{label}"'
        )

    return "\n".join(lines)
