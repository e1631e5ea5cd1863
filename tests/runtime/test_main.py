import logging

from flowgraph.config.settings import RuntimeSettings
from flowgraph.runtime.main import main, run

DEMO = """
name: demo
nodes:
  - {key: add1, operation: add}
  - {key: add2, operation: add}
  - {key: product, operation: multiply}
  - {key: lonely, operation: sqrt}
edges:
  - {source: add1, target: product, target_port: 0}
  - {source: add2, target: product, target_port: 1}
"""


def write_graph(tmp_path, name, text):
    graphs = tmp_path / "graphs"
    graphs.mkdir(exist_ok=True)
    (graphs / f"{name}.yaml").write_text(text)


def test_run_evaluates_every_sink_by_default(tmp_path):
    write_graph(tmp_path, "demo", DEMO)

    results = run(RuntimeSettings(config_dir=tmp_path, graph="demo"))

    assert results == {"product": 4, "lonely": 4.0}


def test_run_evaluates_target_node(tmp_path):
    write_graph(tmp_path, "demo", DEMO)

    results = run(RuntimeSettings(config_dir=tmp_path, graph="demo", target="add1"))

    assert results == {"add1": 2}


def test_main_reports_failure_exit_code(tmp_path, caplog):
    write_graph(tmp_path, "broken", "nodes:\n  - {key: x, operation: hydraNoise}\n")

    with caplog.at_level(logging.ERROR):
        code = main(RuntimeSettings(config_dir=tmp_path, graph="broken"))

    assert code == 1
    assert "unknown operation: 'hydraNoise'" in caplog.text


def test_main_succeeds_on_valid_graph(tmp_path):
    write_graph(tmp_path, "demo", DEMO)

    assert main(RuntimeSettings(config_dir=tmp_path, graph="demo")) == 0


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("FLOWGRAPH_CONFIG_DIR", "/tmp/graphs")
    monkeypatch.setenv("FLOWGRAPH_GRAPH", "synth")
    monkeypatch.setenv("FLOWGRAPH_TARGET", "out")
    monkeypatch.setenv("FLOWGRAPH_LOG_LEVEL", "debug")

    settings = RuntimeSettings.from_env()

    assert str(settings.config_dir) == "/tmp/graphs"
    assert settings.graph == "synth"
    assert settings.target == "out"
    assert settings.log_level == "DEBUG"


def test_settings_defaults(monkeypatch):
    for name in ("CONFIG_DIR", "GRAPH", "TARGET", "LOG_LEVEL"):
        monkeypatch.delenv(f"FLOWGRAPH_{name}", raising=False)

    settings = RuntimeSettings.from_env()

    assert settings.graph == "demo"
    assert settings.target is None
    assert settings.log_level == "INFO"
