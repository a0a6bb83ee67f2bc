from types import SimpleNamespace

from lesson_qa.constants.qa import QAMode
from lesson_qa.llm.prompts.registry import DEFAULT_VERSION, get_default_prompt
from lesson_qa.models.configuration import Configuration
from lesson_qa.models.qa_version import QAVersion
from lesson_qa.repos.prompt_config.read import ConfigurationReadRepo, QAVersionReadRepo
from lesson_qa.services.prompt_resolver import PromptResolver, config_key


class StubConfigRepo:
    def __init__(self, rows=None, exc=None):
        self.rows = rows or {}
        self.exc = exc

    def get_by_key(self, key):
        if self.exc:
            raise self.exc
        return self.rows.get(key)


class StubVersionRepo:
    def __init__(self, rows=None):
        self.rows = rows or {}

    def get_active(self, mode):
        return self.rows.get(mode)


def test_config_key_format():
    assert config_key(QAMode.CHUNK_QA) == "ai-qa-runner-chunk-qa"


def test_default_when_no_stores():
    resolved = PromptResolver().resolve("stem-qa")

    assert resolved.source == "default"
    assert resolved.version_tag == DEFAULT_VERSION == "default-v1"
    assert resolved.instruction == get_default_prompt(QAMode.STEM_QA).template


def test_every_mode_has_a_default():
    for mode in QAMode:
        assert get_default_prompt(mode).template.strip()


def test_config_wins_over_qa_versions():
    cfg = StubConfigRepo({"ai-qa-runner-full-lesson": SimpleNamespace(instruction="From config", is_locked=False)})
    versions = StubVersionRepo({"full-lesson": SimpleNamespace(prompt_template="From versions", version_tag="v7")})

    resolved = PromptResolver(cfg, versions).resolve(QAMode.FULL_LESSON)

    assert resolved.instruction == "From config"
    assert resolved.version_tag == "config-full-lesson"


def test_locked_config_is_tagged():
    cfg = StubConfigRepo({"ai-qa-runner-chunk-qa": SimpleNamespace(instruction="Locked text", is_locked=True)})

    assert PromptResolver(cfg).resolve("chunk-qa").version_tag == "config-chunk-qa-locked"


def test_blank_config_falls_through_to_versions():
    cfg = StubConfigRepo({"ai-qa-runner-full-lesson": SimpleNamespace(instruction="   ", is_locked=False)})
    versions = StubVersionRepo({"full-lesson": SimpleNamespace(prompt_template="From versions", version_tag="v7")})

    resolved = PromptResolver(cfg, versions).resolve("full-lesson")

    assert resolved.source == "qa_versions"
    assert resolved.version_tag == "v7"


def test_failing_store_is_skipped():
    versions = StubVersionRepo({"post-design-qa": SimpleNamespace(prompt_template="From versions", version_tag="pd-2")})

    resolved = PromptResolver(StubConfigRepo(exc=RuntimeError("store down")), versions).resolve("post-design-qa")

    assert resolved.version_tag == "pd-2"


def test_resolves_from_database(db):
    db.add(QAVersion(mode="full-lesson", version_tag="fl-old", prompt_template="old", active=False))
    db.add(QAVersion(mode="full-lesson", version_tag="fl-3", prompt_template="Active template", active=True))
    db.commit()
    resolver = PromptResolver(ConfigurationReadRepo(db), QAVersionReadRepo(db))

    assert resolver.resolve("full-lesson").version_tag == "fl-3"

    db.add(Configuration(key="ai-qa-runner-full-lesson", instruction="Admin override", is_locked=True))
    db.commit()

    resolved = resolver.resolve("full-lesson")
    assert resolved.instruction == "Admin override"
    assert resolved.version_tag == "config-full-lesson-locked"
