"""Floaty CLI - notes from the terminal."""

import sys

import click

from .adapters.json_settings import JsonSettingsStore
from .adapters.jsonl_notes import StorageError
from .config import setup_logging
from .core.notes import EditResult, EmptyNoteError, Note, NoteIndexError, preview, search_notes
from .session import NoteSession
from .workflows import (
    add_note,
    delete_note,
    edit_note,
    get_settings,
    get_store,
    list_notes,
    set_settings,
)

RECENT_COUNT = 5
END_OF_BODY = "."
CLEAR_FIELD = "-"
SHELL_HELP = "Pick an option: add | list | open <n> | edit <n> | delete <n> | search <term> | clear | settings | reload | quit"

FAILURES = (StorageError, NoteIndexError, EmptyNoteError)


def to_index(number: int) -> int:
    """Convert a 1-based number shown to the user into a 0-based index."""
    if number < 1:
        raise NoteIndexError(f"Note numbers start at 1, got {number}")
    return number - 1


def format_note_line(index: int, note: Note) -> str:
    return f"{index + 1:>2} | {note.ts} | {note.display_title} - {preview(note.content)}"


def format_note_full(index: int, note: Note) -> str:
    return f"#{index + 1} {note.display_title}\n{note.ts}\n\n{note.content}"


def shell_field(value: str, current: str) -> str:
    """Blank keeps the current value; the clear marker empties it."""
    if value == CLEAR_FIELD:
        return ""
    return value or current


def read_body(stream=None) -> str:
    """Read content lines until a lone '.' or end of input."""
    stream = stream or click.get_text_stream("stdin")
    lines = []
    while True:
        line = stream.readline()
        if not line:
            break
        line = line.rstrip("\r\n")
        if line == END_OF_BODY:
            break
        lines.append(line)
    return "\n".join(lines)


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="floaty")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--notes-file",
    envvar="FLOATY_NOTES_FILE",
    type=click.Path(dir_okay=False),
    default=None,
    help="Notes file to use instead of ~/notes.jsonl",
)
@click.pass_context
def main(ctx: click.Context, debug: bool, notes_file: str | None):
    """Floaty - small local note keeper."""
    setup_logging(debug)
    ctx.obj = get_store(notes_file)


@main.command()
@click.argument("title", default="")
@click.option("--content", "-c", default=None, help="Note body (read from stdin if omitted)")
@click.pass_obj
def add(store, title: str, content: str | None):
    """Add a note."""
    if content is None:
        click.echo(f"Enter note (a single '{END_OF_BODY}' on its own ends the note):")
        content = read_body()
    try:
        add_note(store, title, content)
    except FAILURES as e:
        _fail(e)
    click.echo("Saved.")


@main.command("list")
@click.option("--all", "show_all", is_flag=True, help="Show every note, not just the latest")
@click.pass_obj
def list_cmd(store, show_all: bool):
    """List recent notes."""
    try:
        notes = list_notes(store)
    except StorageError as e:
        _fail(e)

    if not notes:
        click.echo("No notes.")
        return

    start = 0 if show_all else max(0, len(notes) - RECENT_COUNT)
    for i in range(start, len(notes)):
        click.echo(format_note_line(i, notes[i]))


@main.command()
@click.argument("number", type=int)
@click.pass_obj
def show(store, number: int):
    """Show one note in full."""
    try:
        index = to_index(number)
        notes = list_notes(store)
        if index >= len(notes):
            raise NoteIndexError(f"No note #{number} ({len(notes)} notes)")
    except FAILURES as e:
        _fail(e)
    click.echo(format_note_full(index, notes[index]))


@main.command()
@click.argument("number", type=int)
@click.option("--title", "-t", default=None, help="New title (unchanged if omitted)")
@click.option("--content", "-c", default=None, help="New body (unchanged if omitted)")
@click.pass_obj
def edit(store, number: int, title: str | None, content: str | None):
    """Edit a note. Clearing both title and content deletes it."""
    try:
        index = to_index(number)
        notes = list_notes(store)
        if index >= len(notes):
            raise NoteIndexError(f"No note #{number} ({len(notes)} notes)")
        current = notes[index]
        result = edit_note(
            store,
            index,
            current.title if title is None else title,
            current.content if content is None else content,
        )
    except FAILURES as e:
        _fail(e)
    click.echo(_describe_edit(number, result))


@main.command()
@click.argument("number", type=int)
@click.pass_obj
def delete(store, number: int):
    """Delete a note."""
    try:
        removed = delete_note(store, to_index(number))
    except FAILURES as e:
        _fail(e)
    click.echo(f"Deleted #{number} {removed.display_title}.")


@main.command()
@click.argument("term")
@click.pass_obj
def search(store, term: str):
    """Search titles and content."""
    try:
        matches = search_notes(list_notes(store), term)
    except StorageError as e:
        _fail(e)

    if not matches:
        click.echo("No matching notes.")
        return
    for i, note in matches:
        click.echo(format_note_line(i, note))


@main.command()
@click.option("--reopen/--no-reopen", default=None, help="Reopen the note window on restart")
@click.option("--shortcut", default=None, help="Global shortcut for the note window")
@click.option("--settings-file", type=click.Path(dir_okay=False), default=None, hidden=True)
def settings(reopen: bool | None, shortcut: str | None, settings_file: str | None):
    """Show or change settings."""
    settings_store = JsonSettingsStore(settings_file) if settings_file else JsonSettingsStore()
    current = get_settings(settings_store)

    if reopen is not None or shortcut is not None:
        if reopen is not None:
            current.reopen_on_restart = reopen
        if shortcut is not None:
            current.shortcut_binding = shortcut
        try:
            set_settings(current, settings_store)
        except StorageError as e:
            _fail(e)
        click.echo("Settings saved.")

    click.echo(f"reopen_on_restart: {'yes' if current.reopen_on_restart else 'no'}")
    click.echo(f"shortcut_binding: {current.shortcut_binding}")


@main.command()
@click.pass_obj
def shell(store):
    """Interactive note shell."""
    session = NoteSession(store, JsonSettingsStore())
    stdin = click.get_text_stream("stdin")

    while True:
        click.echo(SHELL_HELP)
        line = stdin.readline()
        if not line:
            break
        cmd, _, arg = line.strip().partition(" ")
        arg = arg.strip()
        if cmd == "quit":
            break
        try:
            _run_shell_command(session, cmd, arg, stdin)
        except FAILURES as e:
            click.echo(f"Error: {e}", err=True)
        except ValueError:
            click.echo(f"Expected a note number, got '{arg}'", err=True)


def _run_shell_command(session: NoteSession, cmd: str, arg: str, stdin) -> None:
    match cmd:
        case "add":
            click.echo("Enter note title: ", nl=False)
            title = stdin.readline().rstrip("\r\n")
            click.echo(f"Enter note (a single '{END_OF_BODY}' on its own ends the note):")
            session.append(title, read_body(stdin))
            click.echo("Saved.")
        case "list":
            notes = session.list_notes()
            if not notes:
                click.echo("No notes.")
                return
            for i in range(max(0, len(notes) - RECENT_COUNT), len(notes)):
                click.echo(format_note_line(i, notes[i]))
            click.echo("Type `open <n>` to view a full note\n")
        case "open":
            index = to_index(int(arg))
            click.echo(format_note_full(index, session.get(index)))
        case "edit":
            index = to_index(int(arg))
            current = session.get(index)
            click.echo(
                f"New title (blank keeps '{current.title}', '{CLEAR_FIELD}' clears it): ", nl=False
            )
            title = shell_field(stdin.readline().rstrip("\r\n"), current.title)
            click.echo(
                f"New note (a single '{END_OF_BODY}' ends it, empty keeps the current body, "
                f"'{CLEAR_FIELD}' clears it; clearing both deletes the note):"
            )
            content = shell_field(read_body(stdin), current.content)
            click.echo(_describe_edit(index + 1, session.edit(index, title, content)))
        case "delete":
            index = to_index(int(arg))
            removed = session.delete(index)
            click.echo(f"Deleted #{index + 1} {removed.display_title}.")
        case "search":
            matches = search_notes(session.list_notes(), arg)
            if not matches:
                click.echo("No matching notes.")
            for i, note in matches:
                click.echo(format_note_line(i, note))
        case "clear":
            click.echo("Delete every note? [y/N]: ", nl=False)
            if stdin.readline().strip().lower() in ("y", "yes"):
                session.clear()
                click.echo("Cleared.")
        case "settings":
            current = session.get_settings()
            click.echo(f"reopen_on_restart: {'yes' if current.reopen_on_restart else 'no'}")
            click.echo(f"shortcut_binding: {current.shortcut_binding}")
        case "reload":
            session.invalidate()
            click.echo(f"Reloaded {len(session.list_notes())} notes.")
        case "":
            pass
        case other:
            click.echo(f"Unknown command, {other}, please try again...")


def _describe_edit(number: int, result: EditResult) -> str:
    match result:
        case EditResult.DELETED:
            return f"Deleted #{number} (title and content were empty)."
        case EditResult.UNCHANGED:
            return "No changes."
        case _:
            return f"Updated #{number}."


if __name__ == "__main__":
    main()
