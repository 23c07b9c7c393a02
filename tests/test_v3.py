import io

import pytest

from sotaller.v3 import SHOTS, STAGES, V3Launcher, main


def test_stages_are_numbered_and_linked():
    with V3Launcher(4, io.StringIO()) as launcher:
        numbers = [stage.number for stage in launcher.stages]
        links = [stage.next_stage for stage in launcher.stages]
    assert numbers == [1, 2, 3, 4]
    assert links[:-1] == launcher.stages[1:]
    assert links[-1] is None


def test_single_shot_output_is_ordered():
    out = io.StringIO()
    with V3Launcher(2, out) as launcher:
        launcher.fire_projectile()
    expected = (
        "[Proyectil] Iniciando recorrido por 2 etapas...\n"
        "[Proyectil] Entrando a etapa 1\n"
        "  [Etapa 1] *** DISPARO LATERAL ***\n"
        "[Proyectil] Etapa 1 completada. Mas velocidad\n"
        "[Proyectil] Entrando a etapa 2\n"
        "  [Etapa 2] *** DISPARO LATERAL ***\n"
        "[Proyectil] Etapa 2 completada. Mas velocidad\n"
        "[Proyectil] Recorrido completo Velocidad maxima alcanzada.\n\n"
    )
    assert out.getvalue() == expected


def test_reload_then_fire_again_counts():
    out = io.StringIO()
    with V3Launcher(3, out) as launcher:
        launcher.fire_projectile()
        launcher.reload()
        launcher.fire_projectile()
    text = out.getvalue()
    assert text.count("*** DISPARO LATERAL ***") == 6
    assert text.count("Recargada y lista.") == 3
    assert text.count("[Recarga]   Todas las etapas recargadas.") == 1


def test_each_stage_fires_before_projectile_moves_on():
    out = io.StringIO()
    with V3Launcher(3, out) as launcher:
        launcher.fire_projectile()
    lines = out.getvalue().splitlines()
    for number in (1, 2, 3):
        fired = lines.index(f"  [Etapa {number}] *** DISPARO LATERAL ***")
        done = lines.index(f"[Proyectil] Etapa {number} completada. Mas velocidad")
        assert fired < done


def test_close_stops_threads_and_rejects_further_use():
    launcher = V3Launcher(3, io.StringIO())
    launcher.fire_projectile()
    launcher.close()
    launcher.close()
    assert all(not stage.thread.is_alive() for stage in launcher.stages)
    with pytest.raises(RuntimeError):
        launcher.fire_projectile()
    with pytest.raises(RuntimeError):
        launcher.reload()


def test_negative_stage_count_is_rejected():
    with pytest.raises(ValueError):
        V3Launcher(-1, io.StringIO())


def test_main_runs_all_shots(capsys):
    assert main([]) == 0
    text = capsys.readouterr().out
    assert text.startswith("=== V-3 Control System  (5 etapas, 3 disparos) ===\n\n")
    assert text.endswith("=== Fin ===\n")
    assert text.count("*** DISPARO LATERAL ***") == STAGES * SHOTS
    assert text.count("Recargada y lista.") == STAGES * (SHOTS - 1)
    assert text.count("--- Disparo ") == SHOTS