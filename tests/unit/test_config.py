from tool_router.config import OrchestratorConfig


def test_local_models_get_smaller_default() -> None:
    config = OrchestratorConfig()

    assert config.max_results_for("openai:gpt-4o-mini") == 20
    assert config.max_results_for("ollama:llama3.2") == 5
    assert config.max_results_for("") == 20
