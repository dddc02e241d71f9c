from pathlib import Path

from autodb import config
from autodb.diagram import schema_to_mermaid
from autodb.errors import NoSchemaError
from autodb.generator import SchemaGenerator
from autodb.handlers import SchemaSession
from autodb.view import TAB_LABELS, Tab

HELP = """Commands:
  <description>        generate a schema
  :erd :sql :models :json   switch view
  :save sql|json       write schema.sql / schema.json
  reset                start over
  quit                 exit"""


def show(session: SchemaSession) -> str:
    """Text for the active tab; the ERD is shown as Mermaid"""
    tab = session.view.active_tab
    if session.schema is None:
        return "No schema yet."
    if tab == Tab.ERD:
        body = schema_to_mermaid(session.schema)
        body += "\n\nPaste into https://mermaid.live to view."
    else:
        body = session.view.content
    return f"=== {TAB_LABELS[tab]} ===\n{body}"


def handle_command(session: SchemaSession, command: str, generator: SchemaGenerator, out_dir: Path = Path(".")) -> str:
    """Run one line of input and return what to print"""
    if command.lower() == "reset":
        session.handle_reset()
        return "Schema cleared. Start fresh!"

    if command.startswith(":save"):
        kind = command[len(":save"):].strip() or "sql"
        try:
            file = session.handle_export(kind)
        except (NoSchemaError, ValueError) as e:
            return str(e)
        path = out_dir / file.filename
        path.write_text(file.content, encoding="utf-8")
        return f"Saved {path}"

    if command.startswith(":"):
        result = session.handle_select_tab(command[1:])
        if not result["success"]:
            return f"{result['error']}\n\n{HELP}"
        return show(session)

    result = session.handle_generate(command, generator)
    if not result["success"]:
        return f"Error: {result['error']}"
    return f"{result['message']}\n\n{show(session)}"


def main():
    config.configure_logging("WARNING")
    generator = SchemaGenerator()
    session = SchemaSession()

    print("=" * 50)
    print("AutoDB Architect - Database Schema Generator")
    print("Type 'quit' to exit, 'help' for commands")
    print("=" * 50)
    print("\nTry: " + config.EXAMPLE_PROMPTS[0])
    print()

    while True:
        try:
            user_input = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if user_input.lower() == "quit":
            print("Goodbye!")
            break
        elif user_input.lower() == "help":
            print(HELP)
            continue
        elif not user_input:
            continue

        print(f"\n{handle_command(session, user_input, generator)}\n")


if __name__ == "__main__":
    main()
