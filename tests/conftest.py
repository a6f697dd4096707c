"""Shared fixtures for advisor and forecaster tests."""

import json

import pytest

from project_forecast import config as forecast_config
from strategy_advisor import config as advisor_config
from strategy_advisor.schema import KnowledgeProject, Project, Rule, Strategy


PROJECT_DATA = {
    "id": "p-1",
    "name": "CRM Rollout",
    "team_size": 10,
    "budget": 200000,
    "duration_months": 6,
    "complexity": "medium",
    "project_type": "development",
    "risk_level": "medium",
    "team_experience": "mixed",
    "client_involvement": "active",
    "requirements_stability": "volatile",
    "tech_stack_novelty": "established",
}

STRATEGIES_DATA = [
    {"id": "agile", "name": {"en": "Agile Scrum", "uk": "Agile Scrum (uk)"}},
    {"id": "waterfall", "name": {"en": "Waterfall", "uk": "Водоспад"}},
]

RULES_DATA = [
    {
        "id": "r1",
        "strategy_id": "agile",
        "conditions": {"requirements_stability": "volatile"},
        "weight": 2,
        "description": {"en": "Volatile requirements favour iterations", "uk": "Нестабільні вимоги"},
    },
    {
        "id": "r2",
        "strategy_id": "waterfall",
        "conditions": {"requirements_stability": {"in": ["stable"]}},
        "weight": 1,
        "description": {"en": "Stable requirements", "uk": "Стабільні вимоги"},
    },
    {
        "id": "r3",
        "strategy_id": "agile",
        "conditions": '{"team_size": {"min": 5, "max": 20}}',
        "description": {"en": "Team fits a scrum setup"},
    },
]


@pytest.fixture(autouse=True)
def default_configs(monkeypatch):
    """Run every test against default configuration."""
    monkeypatch.delenv("STRATEGY_ADVISOR_CONFIG", raising=False)
    monkeypatch.delenv("PROJECT_FORECAST_CONFIG", raising=False)
    advisor_config.reset_config()
    forecast_config.reset_config()
    yield
    advisor_config.reset_config()
    forecast_config.reset_config()


@pytest.fixture
def project() -> Project:
    return Project.model_validate(PROJECT_DATA)


@pytest.fixture
def strategies() -> list[Strategy]:
    return [Strategy.model_validate(item) for item in STRATEGIES_DATA]


@pytest.fixture
def rules() -> list[Rule]:
    return [Rule.model_validate(item) for item in RULES_DATA]


@pytest.fixture
def twin_case() -> KnowledgeProject:
    """A successful knowledge-base case identical to the project."""
    return KnowledgeProject.model_validate({
        **PROJECT_DATA,
        "id": "kb-1",
        "name": "CRM Rollout 2019",
        "outcome": "success",
        "strategy_id": "agile",
        "success_rate": 85,
    })


@pytest.fixture
def input_files(tmp_path):
    """Project, knowledge, strategies and rules JSON files."""
    knowledge = [{
        **PROJECT_DATA,
        "id": "kb-1",
        "name": "CRM Rollout 2019",
        "outcome": "success",
        "strategy_id": "agile",
    }]
    paths = {}
    for name, data in [
        ("project", [PROJECT_DATA]),
        ("knowledge", knowledge),
        ("strategies", STRATEGIES_DATA),
        ("rules", RULES_DATA),
    ]:
        path = tmp_path / f"{name}.json"
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        paths[name] = path
    return paths
