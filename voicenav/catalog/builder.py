"""Builds the role-filtered voice command catalog.

The catalog is a pure function of ``(role, entities)``: static commands in
definition order, followed by two synthesized commands per lesson topic.
Nothing here touches I/O, so the same inputs always yield an equal catalog.
"""

import logging
from collections.abc import Iterable, Sequence

from voicenav.catalog.types import ANY_AUDIENCE, Catalog, Command, DynamicEntity, Role

logger = logging.getLogger(__name__)


def _group(
    audience: Role | str, action: str, variants: Sequence[tuple[str, str]]
) -> list[Command]:
    return [
        Command(phrase=phrase, action=action, feedback_text=feedback, audience=audience)
        for phrase, feedback in variants
    ]


# ---------------------------------------------------------------------------
# Static command definitions
# ---------------------------------------------------------------------------

_STUDENT_COMMANDS: list[Command] = [
    *_group(Role.STUDENT, "/student/dashboard", [
        ("go to dashboard", "Navigating to your dashboard."),
        ("open dashboard", "Opening dashboard."),
        ("show dashboard", "Showing your dashboard."),
    ]),
    *_group(Role.STUDENT, "/leaderboard", [
        ("open leaderboard", "Opening the leaderboard."),
        ("show leaderboard", "Showing the leaderboard."),
        ("check rankings", "Checking the rankings on the leaderboard."),
    ]),
    *_group(Role.STUDENT, "/student/messages", [
        ("open messages", "Opening your messages."),
        ("show messages", "Showing messages."),
        ("check messages", "Checking messages."),
    ]),
    *_group(Role.STUDENT, "/student/quizzes", [
        ("open quizzes", "Opening quizzes."),
        ("show lessons", "Navigating to quizzes."),
        ("start quizzes", "Going to quizzes."),
    ]),
    *_group(Role.STUDENT, "/student/resources", [
        ("open resources", "Opening resources."),
        ("show resources", "Showing resources."),
        ("access resources", "Accessing resources."),
    ]),
    *_group(Role.STUDENT, "/student/my-progress", [
        ("show my progress", "Showing your progress."),
        ("check progress", "Checking your progress."),
        ("open progress tracker", "Opening progress tracker."),
    ]),
    *_group(Role.STUDENT, "/student/achievements", [
        ("check achievements", "Checking your achievements."),
        ("show achievements", "Showing your achievements."),
        ("open achievements", "Opening achievements."),
    ]),
    *_group(Role.STUDENT, "/student/assistant", [
        ("open ai math assistant", "Opening the AI Math Assistant."),
        ("start ai math assistant", "Starting the AI assistant."),
        ("go to ai math assistant", "Going to the AI assistant."),
    ]),
]

_TEACHER_COMMANDS: list[Command] = [
    *_group(Role.TEACHER, "/teacher/dashboard", [
        ("go to dashboard", "Navigating to your dashboard."),
        ("open dashboard", "Opening dashboard."),
    ]),
    *_group(Role.TEACHER, "/teacher/messages", [
        ("open messages", "Opening your messages."),
        ("check messages", "Checking messages."),
    ]),
    *_group(Role.TEACHER, "/teacher/progress-overview", [
        ("open progress overview", "Opening the progress overview."),
        ("show student progress", "Showing student progress."),
    ]),
    *_group(Role.TEACHER, "/teacher/students", [
        ("manage students", "Opening student management."),
        ("open student management", "Opening student management."),
    ]),
    *_group(Role.TEACHER, "/teacher/sections", [
        ("manage sections", "Opening section management."),
        ("open section management", "Opening section management."),
    ]),
    *_group(Role.TEACHER, "/teacher/quizzes", [
        ("manage quizzes", "Opening quiz management."),
        ("open quiz management", "Opening quiz management."),
    ]),
    *_group(Role.TEACHER, "/teacher/materials", [
        ("manage resources", "Opening resource management."),
        ("open resource management", "Opening resource management."),
    ]),
]

_ADMIN_COMMANDS: list[Command] = [
    *_group(Role.ADMIN, "/admin/dashboard", [
        ("go to dashboard", "Navigating to your dashboard."),
        ("open dashboard", "Opening dashboard."),
    ]),
    *_group(Role.ADMIN, "/admin/progress-overview", [
        ("open progress overview", "Opening the progress overview."),
    ]),
    *_group(Role.ADMIN, "/admin/analytics", [
        ("open platform analytics", "Opening platform analytics."),
        ("show analytics", "Showing analytics."),
    ]),
    *_group(Role.ADMIN, "/admin/reports", [
        ("open user reports", "Opening user reports."),
        ("show reports", "Showing reports."),
    ]),
    *_group(Role.ADMIN, "/admin/users", [
        ("manage users", "Opening user management."),
        ("open user management", "Opening user management."),
    ]),
    *_group(Role.ADMIN, "/admin/settings", [
        ("open system settings", "Opening system settings."),
    ]),
]

_PRINCIPAL_COMMANDS: list[Command] = [
    *_group(Role.PRINCIPAL, "/principal/dashboard", [
        ("go to dashboard", "Navigating to your dashboard."),
        ("open dashboard", "Opening dashboard."),
    ]),
    *_group(Role.PRINCIPAL, "/principal/progress-overview", [
        ("open progress overview", "Opening the progress overview."),
    ]),
    *_group(Role.PRINCIPAL, "/principal/teachers", [
        ("manage teachers", "Opening teacher management."),
        ("open teacher management", "Opening teacher management."),
    ]),
    *_group(Role.PRINCIPAL, "/principal/students", [
        ("show student details", "Showing student details."),
    ]),
    *_group(Role.PRINCIPAL, "/principal/activity-monitoring", [
        ("open activity monitor", "Opening the teacher activity monitor."),
        ("monitor teacher activity", "Monitoring teacher activity."),
    ]),
]

_SHARED_COMMANDS: list[Command] = [
    *_group(ANY_AUDIENCE, "/profile", [
        ("open my profile", "Opening your profile."),
        ("show my profile", "Showing your profile."),
    ]),
    *_group(ANY_AUDIENCE, "/settings", [
        ("open settings", "Opening settings."),
    ]),
    *_group(ANY_AUDIENCE, "/help", [
        ("open help", "Opening help."),
        ("i need help", "Opening help."),
    ]),
]

STATIC_COMMANDS: tuple[Command, ...] = tuple(
    _STUDENT_COMMANDS
    + _TEACHER_COMMANDS
    + _ADMIN_COMMANDS
    + _PRINCIPAL_COMMANDS
    + _SHARED_COMMANDS
)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def topic_route(role: Role, slug: str) -> str:
    """Return the quiz route for topic *slug* under *role*'s area."""
    return f"/{role.value}/quizzes/{slug}"


def synthesize_topic_commands(role: Role, entity: DynamicEntity) -> list[Command]:
    """Return the ``go to`` / ``open`` phrase pair for one topic."""
    action = topic_route(role, entity.slug)
    feedback = f"Opening {entity.title}."
    return [
        Command(
            phrase=f"{verb} {entity.title}",
            action=action,
            feedback_text=feedback,
            audience=role,
        )
        for verb in ("go to", "open")
    ]


def build_catalog(
    role: Role | str,
    entities: Iterable[DynamicEntity] = (),
    *,
    static_commands: Sequence[Command] = STATIC_COMMANDS,
) -> Catalog:
    """Assemble the catalog of commands recognizable by *role*.

    Static commands are kept when their audience is ``"any"`` or *role*.
    Each entity contributes two commands scoped to *role*; entities whose
    title has no letters or digits are skipped.
    """
    role = Role(role)
    commands = [command for command in static_commands if command.visible_to(role)]
    static_count = len(commands)

    for entity in entities:
        if not any(ch.isalnum() for ch in entity.title):
            # "go to" alone would otherwise match this topic exactly.
            logger.warning("Skipping topic %r: title has no words", entity.slug)
            continue
        commands.extend(synthesize_topic_commands(role, entity))

    logger.debug(
        "Built catalog for %s: %d static, %d dynamic",
        role.value,
        static_count,
        len(commands) - static_count,
    )
    return Catalog(role=role, commands=tuple(commands))
