"""
BDD step definitions for the todo list (pytest-bdd).
"""

from pytest_bdd import given, parsers, scenarios, then, when

scenarios("todos.feature")


@given(parsers.parse('I create a todo "{text}"'))
@when(parsers.parse('I create a todo "{text}"'))
def create_todo(api, text):
    r = api.post("/api/todos", json={"text": text})
    assert r.status_code == 200


@then(parsers.parse('the todo list should be "{texts}"'))
def todo_list_is(response, texts):
    expected = [t.strip() for t in texts.split(",")]
    assert [t["text"] for t in response["body"]] == expected


@then("the todo list should be empty")
def todo_list_empty(response):
    assert response["body"] == []
