"""
Person CRUD commands.

Each command returns the process exit code: 0 on success, 1 when the
service rejected the request (unknown id, duplicate id, invalid input)
and 2 when the service could not be reached or failed internally.
"""

from typing import Any, Dict

import httpx

from ..http import HTTPClient
from ..render import Renderer


def _exit_code_for(error: Exception) -> int:
    if isinstance(error, httpx.HTTPStatusError) and error.response.status_code < 500:
        return 1
    return 2


def _describe(error: Exception) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        try:
            detail = error.response.json().get("detail")
        except ValueError:
            detail = None
        return f"{error.response.status_code} {detail or error.response.reason_phrase}"
    return str(error)


def build_person(person_id: int, name: str, age: int, date: str) -> Dict[str, Any]:
    """Build the JSON body for a person record."""
    return {"id": person_id, "name": name, "age": age, "date": date}


def list_command(http_client: HTTPClient, renderer: Renderer) -> int:
    """List all persons."""
    try:
        persons = http_client.list_persons()
    except Exception as e:
        renderer.print_error(f"Failed to list persons: {_describe(e)}")
        return _exit_code_for(e)

    if renderer.json_output:
        renderer.print_json(persons)
    elif not persons:
        renderer.print("No persons found")
    else:
        rows = [
            {
                "ID": p.get("id", ""),
                "Name": p.get("name", ""),
                "Age": p.get("age", ""),
                "Date": p.get("date", ""),
            }
            for p in persons
        ]
        renderer.print_table(rows, title="Persons")
    return 0


def get_command(person_id: int, http_client: HTTPClient, renderer: Renderer) -> int:
    """Show one person."""
    try:
        person = http_client.get_person(person_id)
    except Exception as e:
        renderer.print_error(f"Failed to get person {person_id}: {_describe(e)}")
        return _exit_code_for(e)

    renderer.print_json(person)
    return 0


def add_command(person: Dict[str, Any], http_client: HTTPClient, renderer: Renderer) -> int:
    """Create a person."""
    try:
        http_client.create_person(person)
    except Exception as e:
        renderer.print_error(f"Failed to create person {person['id']}: {_describe(e)}")
        return _exit_code_for(e)

    renderer.print_success(f"Created person {person['id']}")
    return 0


def update_command(person: Dict[str, Any], http_client: HTTPClient, renderer: Renderer) -> int:
    """Update a person's name, age and date."""
    try:
        http_client.update_person(person)
    except Exception as e:
        renderer.print_error(f"Failed to update person {person['id']}: {_describe(e)}")
        return _exit_code_for(e)

    renderer.print_success(f"Updated person {person['id']}")
    return 0


def delete_command(person_id: int, http_client: HTTPClient, renderer: Renderer) -> int:
    """Delete a person."""
    try:
        http_client.delete_person(person_id)
    except Exception as e:
        renderer.print_error(f"Failed to delete person {person_id}: {_describe(e)}")
        return _exit_code_for(e)

    renderer.print_success(f"Deleted person {person_id}")
    return 0
