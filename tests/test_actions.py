"""Tests for action validation, dispatch and the individual handlers."""

import pytest
from sqlalchemy.exc import OperationalError

from forum_admin.application.use_cases.actions import (
    ActionName,
    AdminAction,
    dispatch_action,
    resolve_action_name,
)
from forum_admin.domain.errors import (
    NotAuthorized,
    NotFound,
    PartialFailure,
    PreconditionFailed,
    ValidationError,
)
from forum_admin.domain.queries import AdminContext, CascadeStage, EntityType
from forum_admin.infrastructure.repositories import SqlAlchemyForumRepository


def _run(repository, context, name, **parameters):
    return dispatch_action(AdminAction(name=name, parameters=parameters), repository, context)


def test_alias_and_case_are_resolved():
    assert resolve_action_name("clear_notifications") is ActionName.CLEAR_OLD_NOTIFICATIONS
    assert resolve_action_name("delete_user") is ActionName.DELETE_USER


def test_unknown_action(repository, admin_context):
    with pytest.raises(ValidationError) as excinfo:
        _run(repository, admin_context, "REBUILD_INDEXES")

    assert excinfo.value.code == "InvalidAction"


def test_unknown_parameter(repository, admin_context):
    with pytest.raises(ValidationError) as excinfo:
        _run(repository, admin_context, "CLEAR_OLD_NOTIFICATIONS", days=3)

    assert excinfo.value.field == "days"


def test_non_admin_is_rejected(repository):
    with pytest.raises(NotAuthorized):
        _run(repository, AdminContext(actor_id=3, is_admin=False), "GENERATE_SYSTEM_REPORT")


def test_clear_old_notifications_is_idempotent(repository, admin_context, forum):
    user = forum.user()
    forum.notification(user, read=True, days_ago=60)
    forum.notification(user, read=True, days_ago=5)
    forum.notification(user, read=False, days_ago=60)

    first = _run(repository, admin_context, "CLEAR_OLD_NOTIFICATIONS", olderThanDays=30)
    second = _run(repository, admin_context, "CLEAR_OLD_NOTIFICATIONS", olderThanDays=30)

    assert first.affected == 1
    assert second.affected == 0
    assert second.status.value == "completed"
    assert repository.count(EntityType.NOTIFICATIONS) == 2


@pytest.mark.parametrize("value", [0, -2, "ten", True])
def test_invalid_day_parameter(repository, admin_context, value):
    with pytest.raises(ValidationError):
        _run(repository, admin_context, "CLEAR_OLD_NOTIFICATIONS", olderThanDays=value)


@pytest.mark.parametrize("confirm", [None, False, "no"])
def test_destructive_actions_need_confirmation(repository, admin_context, forum, confirm):
    forum.user(days_ago=200)
    parameters = {} if confirm is None else {"confirm": confirm}

    with pytest.raises(PreconditionFailed):
        _run(repository, admin_context, "DELETE_INACTIVE_USERS", **parameters)

    assert repository.count(EntityType.USERS) == 1


def test_missing_confirmation_wins_over_missing_user_id(repository, admin_context):
    with pytest.raises(PreconditionFailed):
        _run(repository, admin_context, "DELETE_USER")


def test_missing_confirmation_wins_over_unknown_parameter(repository, admin_context, forum):
    forum.user(days_ago=200)

    with pytest.raises(PreconditionFailed):
        _run(repository, admin_context, "DELETE_INACTIVE_USERS", inactivDays=5)

    assert repository.count(EntityType.USERS) == 1


def test_unknown_parameter_on_confirmed_action(repository, admin_context):
    with pytest.raises(ValidationError) as excinfo:
        _run(repository, admin_context, "DELETE_INACTIVE_USERS", inactivDays=5, confirm=True)

    assert excinfo.value.field == "inactivDays"


def test_delete_inactive_users(repository, forum):
    actor = forum.admin(days_ago=300)
    idle = forum.user(days_ago=100)
    dormant = forum.user(days_ago=100)
    recent = forum.user(days_ago=2)
    question = forum.question(dormant, days_ago=80)
    forum.comment(recent, question, days_ago=1)
    context = AdminContext(actor_id=actor, is_admin=True)

    result = _run(
        repository, context, "DELETE_INACTIVE_USERS", inactiveDays=30, confirm=True
    )

    assert result.details["deletedUserIds"] == [idle]
    assert result.affected == 1
    assert repository.list_ids(EntityType.USERS) == [actor, dormant, recent]

    dormant_result = _run(
        repository,
        context,
        "DELETE_INACTIVE_USERS",
        inactiveDays=30,
        includeDormant=True,
        confirm="true",
    )

    assert dormant_result.details["deletedUserIds"] == [dormant]
    assert dormant_result.details["counts"]["questions"] == 1
    assert dormant_result.details["counts"]["comments"] == 1
    assert repository.list_ids(EntityType.USERS) == [actor, recent]


def test_delete_user(repository, admin_context, forum):
    forum.admin()
    target = forum.user()
    question = forum.question(target)
    forum.comment(target, question)

    result = _run(repository, admin_context, "DELETE_USER", userId=target, confirm=True)

    assert result.affected == 3
    assert result.summary == f"Deleted user {target} and 2 related records"
    assert repository.get_many(EntityType.USERS, [target]) == {}


def test_delete_missing_user(repository, admin_context):
    with pytest.raises(NotFound):
        _run(repository, admin_context, "DELETE_USER", userId=999, confirm=True)


def test_admin_cannot_delete_self(repository, forum):
    actor = forum.admin()
    context = AdminContext(actor_id=actor, is_admin=True)

    with pytest.raises(PreconditionFailed):
        _run(repository, context, "DELETE_USER", userId=actor, confirm=True)

    assert repository.list_ids(EntityType.USERS) == [actor]


def test_partial_failure_reports_completed_users(session, forum):
    first = forum.user(days_ago=100)
    second = forum.user(days_ago=100)
    third = forum.user(days_ago=100)

    class FlakyRepository(SqlAlchemyForumRepository):
        def _delete_stage(self, stage, user_id):
            if user_id == second and stage is CascadeStage.USER:
                raise OperationalError("DELETE", {}, Exception("lock timeout"))
            return super()._delete_stage(stage, user_id)

    repository = FlakyRepository(session)
    context = AdminContext(actor_id=None, is_admin=True)

    with pytest.raises(PartialFailure) as excinfo:
        _run(repository, context, "DELETE_INACTIVE_USERS", confirm=True)

    failure = excinfo.value
    assert failure.completed == [first]
    assert failure.user_id == second
    assert failure.stage == "user"
    assert failure.affected["user"] == 1
    assert repository.list_ids(EntityType.USERS) == [second, third]


def test_system_report(repository, admin_context, forum):
    user = forum.user(days_ago=100)
    forum.notification(user, read=True)
    forum.notification(user, read=False)

    result = _run(repository, admin_context, "GENERATE_SYSTEM_REPORT")

    assert result.affected == 0
    report = result.report
    assert report.overview.stats.total_users == 1
    assert report.diagnostics.record_counts["notifications"] == 2
    assert report.diagnostics.read_notifications == 1
    assert report.diagnostics.unread_notifications == 1
    assert report.diagnostics.never_active_users == 1
    assert report.diagnostics.backend["backend"] == "sqlite"
