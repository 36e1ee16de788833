"""Tests for voicenav.catalog — command models and the role-filtered builder."""

import pytest
from pydantic import ValidationError

from voicenav.catalog.builder import (
    STATIC_COMMANDS,
    build_catalog,
    synthesize_topic_commands,
    topic_route,
)
from voicenav.catalog.topics import DEFAULT_TOPICS
from voicenav.catalog.types import ANY_AUDIENCE, Catalog, Command, DynamicEntity, Role


# ---------------------------------------------------------------------------
# Command model
# ---------------------------------------------------------------------------


class TestCommand:

    def test_phrase_is_lowercased_and_trimmed(self):
        command = Command(phrase="  Open Dashboard ", action="/x", feedback_text="ok")
        assert command.phrase == "open dashboard"

    def test_audience_defaults_to_any(self):
        command = Command(phrase="open help", action="/help", feedback_text="ok")
        assert command.audience == ANY_AUDIENCE
        for role in Role:
            assert command.visible_to(role) is True

    def test_role_audience_only_visible_to_that_role(self):
        command = Command(
            phrase="open leaderboard",
            action="/leaderboard",
            feedback_text="ok",
            audience="student",
        )
        assert command.audience is Role.STUDENT
        assert command.visible_to(Role.STUDENT) is True
        assert command.visible_to(Role.TEACHER) is False

    def test_unknown_audience_rejected(self):
        with pytest.raises(ValidationError):
            Command(phrase="x", action="/x", feedback_text="ok", audience="janitor")

    def test_commands_are_immutable(self):
        command = Command(phrase="open help", action="/help", feedback_text="ok")
        with pytest.raises(ValidationError):
            command.action = "/elsewhere"


# ---------------------------------------------------------------------------
# Static definitions
# ---------------------------------------------------------------------------


class TestStaticCommands:

    def test_every_command_has_route_and_feedback(self):
        for command in STATIC_COMMANDS:
            assert command.action.startswith("/")
            assert command.feedback_text

    def test_no_duplicate_phrase_within_an_audience(self):
        seen = set()
        for command in STATIC_COMMANDS:
            key = (command.audience, command.phrase)
            assert key not in seen, key
            seen.add(key)

    def test_student_navigation_phrases_present(self):
        student = {c.phrase: c.action for c in STATIC_COMMANDS if c.audience == Role.STUDENT}
        assert student["go to dashboard"] == "/student/dashboard"
        assert student["open leaderboard"] == "/leaderboard"
        assert student["open ai math assistant"] == "/student/assistant"
        assert len(student) == 24


# ---------------------------------------------------------------------------
# build_catalog
# ---------------------------------------------------------------------------


class TestBuildCatalog:

    @pytest.mark.parametrize("role", list(Role))
    def test_only_role_and_shared_commands_included(self, role):
        catalog = build_catalog(role)
        assert len(catalog) > 0
        for command in catalog.commands:
            assert command.audience in (role, ANY_AUDIENCE)

    @pytest.mark.parametrize("role", list(Role))
    def test_static_commands_keep_definition_order(self, role):
        catalog = build_catalog(role)
        expected = [c for c in STATIC_COMMANDS if c.visible_to(role)]
        assert list(catalog.commands) == expected

    def test_accepts_role_as_string(self):
        assert build_catalog("teacher").role is Role.TEACHER

    def test_unknown_role_raises(self):
        with pytest.raises(ValueError):
            build_catalog("janitor")

    def test_leaderboard_is_student_only(self):
        assert "open leaderboard" in build_catalog("student").phrases
        for role in (Role.TEACHER, Role.ADMIN, Role.PRINCIPAL):
            assert "open leaderboard" not in build_catalog(role).phrases

    def test_dashboard_routes_differ_per_role(self):
        for role in Role:
            catalog = build_catalog(role)
            dashboard = next(c for c in catalog.commands if c.phrase == "go to dashboard")
            assert dashboard.action == f"/{role.value}/dashboard"

    def test_shared_commands_reach_every_role(self):
        for role in Role:
            assert "open my profile" in build_catalog(role).phrases

    def test_two_dynamic_commands_per_entity(self, topics):
        without = build_catalog("student")
        with_topics = build_catalog("student", topics)
        assert len(with_topics) == len(without) + 2 * len(topics)

    def test_dynamic_commands_follow_static_ones(self, topics):
        catalog = build_catalog("student", topics)
        dynamic = catalog.commands[-4:]
        assert [c.phrase for c in dynamic] == [
            "go to algebra",
            "open algebra",
            "go to probability",
            "open probability",
        ]

    @pytest.mark.parametrize("role", list(Role))
    def test_dynamic_actions_scoped_to_role(self, role, topics):
        catalog = build_catalog(role, topics)
        dynamic = catalog.commands[-4:]
        assert [c.action for c in dynamic] == [
            f"/{role.value}/quizzes/algebra",
            f"/{role.value}/quizzes/algebra",
            f"/{role.value}/quizzes/probability",
            f"/{role.value}/quizzes/probability",
        ]
        assert all(c.audience is role for c in dynamic)

    def test_same_inputs_give_equal_catalogs(self, topics):
        assert build_catalog("student", topics) == build_catalog("student", topics)

    def test_empty_static_definitions(self, topics):
        catalog = build_catalog("admin", topics, static_commands=())
        assert len(catalog) == 4

    def test_accepts_generator_of_entities(self, topics):
        catalog = build_catalog("student", (t for t in topics))
        assert "open probability" in catalog.phrases

    def test_default_topics_expand(self):
        catalog = build_catalog("student", DEFAULT_TOPICS)
        assert "go to probability" in catalog.phrases
        assert "open quadratic equations & functions" in catalog.phrases


# ---------------------------------------------------------------------------
# Topic synthesis
# ---------------------------------------------------------------------------


class TestTopicCommands:

    def test_topic_route(self):
        assert topic_route(Role.TEACHER, "variation") == "/teacher/quizzes/variation"

    def test_feedback_uses_title(self):
        entity = DynamicEntity(title="Sequences and Series", slug="sequences-series")
        commands = synthesize_topic_commands(Role.STUDENT, entity)
        assert [c.phrase for c in commands] == [
            "go to sequences and series",
            "open sequences and series",
        ]
        assert {c.feedback_text for c in commands} == {"Opening Sequences and Series."}

    def test_non_ascii_titles_kept(self):
        catalog = build_catalog(
            "student",
            [DynamicEntity(title="Géométrie", slug="geometrie"),
             DynamicEntity(title="代数", slug="daishu")],
        )
        assert "go to géométrie" in catalog.phrases
        assert "open 代数" in catalog.phrases

    def test_title_without_words_skipped(self, caplog):
        with caplog.at_level("WARNING"):
            catalog = build_catalog(
                "teacher",
                [DynamicEntity(title=" ?! ", slug="blank"),
                 DynamicEntity(title="Algebra", slug="algebra")],
            )
        actions = [c.action for c in catalog.commands]
        assert "/teacher/quizzes/blank" not in actions
        assert "/teacher/quizzes/algebra" in actions
        assert "blank" in caplog.text


# ---------------------------------------------------------------------------
# Catalog model
# ---------------------------------------------------------------------------


class TestCatalog:

    def test_phrases_and_len(self):
        command = Command(phrase="open help", action="/help", feedback_text="ok")
        catalog = Catalog(role=Role.ADMIN, commands=(command,))
        assert catalog.phrases == ["open help"]
        assert len(catalog) == 1

    def test_empty_catalog(self):
        catalog = Catalog(role=Role.STUDENT)
        assert len(catalog) == 0
        assert catalog.phrases == []
