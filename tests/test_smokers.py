import io
import random

import pytest

from sotaller.smokers import (
    DEFAULT_NAMES,
    Ingredient,
    SMOKER_INGREDIENTS,
    SmokersTable,
    agent_message,
    main,
    parse_names,
    run_agent,
    run_smoker,
    semaphore_name,
)


def test_semaphore_name_joins_prefix_and_name():
    assert semaphore_name("/", "agente") == "/agente"


def test_agent_messages_from_source():
    assert agent_message(Ingredient.MATCH) == "poniendo papel y tabaco"
    assert agent_message(Ingredient.PAPER) == "poniendo cerilla y tabaco"
    assert agent_message(Ingredient.TOBACCO) == "poniendo cerilla y papel"


def test_agent_message_rejects_agent():
    with pytest.raises(ValueError):
        agent_message(Ingredient.AGENT)


def test_parse_names_defaults():
    assert parse_names([]) == DEFAULT_NAMES


def test_parse_names_overrides():
    names = parse_names(["-a", "jefe", "-t", "hoja"])
    assert names[Ingredient.AGENT] == "jefe"
    assert names[Ingredient.TOBACCO] == "hoja"
    assert names[Ingredient.MATCH] == DEFAULT_NAMES[Ingredient.MATCH]


def test_table_prefixes_names():
    table = SmokersTable({Ingredient.PAPER: "hoja"})
    assert table.names[Ingredient.PAPER] == semaphore_name("/", "hoja")
    assert table.ids[Ingredient.PAPER] == "hoja"
    assert set(table.semaphores) == set(Ingredient)


def test_run_smoker_wakes_agent_each_round():
    table = SmokersTable()
    table.semaphores[Ingredient.MATCH].release()
    table.semaphores[Ingredient.MATCH].release()
    out = io.StringIO()
    sleeps = []
    run_smoker(table, Ingredient.MATCH, 2, out, sleeps.append, random.Random(1))
    agent = table.semaphores[Ingredient.AGENT]
    assert agent.acquire(blocking=False)
    assert agent.acquire(blocking=False)
    assert not agent.acquire(blocking=False)
    assert out.getvalue().count("tomo ingredientes") == 2
    assert all(1 <= s <= 5 for s in sleeps)
    assert len(sleeps) == 2


def test_run_smoker_rejects_agent():
    with pytest.raises(ValueError):
        run_smoker(SmokersTable(), Ingredient.AGENT, 1, io.StringIO(), lambda s: None)


def test_run_agent_releases_one_ingredient():
    table = SmokersTable()
    table.semaphores[Ingredient.AGENT].release()
    out = io.StringIO()
    sleeps = []
    run_agent(table, 1, out, sleeps.append, random.Random(7))
    released = [i for i in SMOKER_INGREDIENTS if table.semaphores[i].acquire(blocking=False)]
    assert len(released) == 1
    assert agent_message(released[0]) in out.getvalue()
    assert out.getvalue().endswith("[Agente] Esperando continuar\n")
    assert len(sleeps) == 1 and 1 <= sleeps[0] <= 4
    assert not table.semaphores[Ingredient.AGENT].acquire(blocking=False)


def test_main_help(capsys):
    assert main(["-h"]) == 0
    assert "Uso: ctrl_fumadores" in capsys.readouterr().err