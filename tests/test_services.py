import pytest

from src.accounts.application import AccountService, IUserRepository
from src.accounts.domain import StoredCredentials, UserProfile
from src.core import (
    AuthenticationException,
    InvalidStateException,
    RepositoryException,
    ResourceNotFoundException,
    ValidationException,
)
from src.core.validation import is_missing
from src.evaluations.application import EvaluationService, IEvaluationRepository
from src.infrastructure.llm import MockLLMClient
from src.tickets.application import ITicketRepository, PriorityClassificationService, TicketService


class InMemoryTickets(ITicketRepository):
    def __init__(self, statuses=None):
        self.statuses = statuses or {}
        self.created = []
        self.calls = 0

    async def list_by_user(self, user_id):
        return []

    async def list_by_technician(self, technician_id):
        return []

    async def create(self, ticket):
        self.calls += 1
        ticket.id = len(self.created) + 1
        self.created.append(ticket)
        return ticket

    async def update_status(self, ticket_id, status):
        self.calls += 1
        if ticket_id not in self.statuses:
            return 0
        self.statuses[ticket_id] = status
        return 1

    async def get_status_for_owner(self, ticket_id, user_id):
        self.calls += 1
        return self.statuses.get((ticket_id, user_id))


class InMemoryEvaluations(IEvaluationRepository):
    def __init__(self, fail=False):
        self.rows = []
        self.fail = fail

    async def create(self, evaluation):
        self.rows.append(evaluation)
        return evaluation

    async def count_for(self, ticket_id, user_id, evaluator_role):
        if self.fail:
            raise RepositoryException("count evaluations failed")
        return sum(
            1 for e in self.rows
            if (e.ticket_id, e.user_id, e.evaluator_role) == (ticket_id, user_id, evaluator_role)
        )


class InMemoryUsers(IUserRepository):
    def __init__(self, users=None):
        self.users = users or {}
        self.updates = []

    async def get_active_by_username(self, username):
        return self.users.get(username)

    async def update_credentials(self, user_id, username=None, password_hash=None):
        self.updates.append((user_id, username, password_hash))
        return 1 if user_id == 1 else 0


@pytest.mark.parametrize("value, missing", [
    (None, True),
    ("", True),
    ("  ", True),
    (0, True),
    ("x", False),
    (7, False),
])
def test_is_missing(value, missing):
    assert is_missing(value) is missing


async def test_create_ticket_forces_in_progress_status():
    repo = InMemoryTickets()
    service = TicketService(repo, PriorityClassificationService(MockLLMClient(reply="Alta")))

    ticket = await service.create_ticket(1, 2, "Monitor", "No enciende")

    assert ticket.status == "En proceso"
    assert ticket.priority == "Alta"
    assert repo.created == [ticket]


async def test_create_ticket_validates_before_classifying():
    llm = MockLLMClient(reply="Alta")
    repo = InMemoryTickets()
    service = TicketService(repo, PriorityClassificationService(llm))

    with pytest.raises(ValidationException):
        await service.create_ticket(1, None, "Monitor", "No enciende")

    assert llm.calls == []
    assert repo.calls == 0


async def test_change_status_rejects_before_touching_store():
    repo = InMemoryTickets({5: "En proceso"})
    service = TicketService(repo)

    with pytest.raises(ValidationException):
        await service.change_status(5, "cerrado")

    assert repo.calls == 0


async def test_change_status_unknown_ticket():
    service = TicketService(InMemoryTickets())

    with pytest.raises(ResourceNotFoundException):
        await service.change_status(999, "Cerrado")


async def test_submit_evaluation_checks_ownership_then_state():
    tickets = InMemoryTickets({(1, 10): "Cerrado", (2, 10): "Cancelado"})
    evaluations = InMemoryEvaluations()
    service = EvaluationService(evaluations, tickets)

    with pytest.raises(ResourceNotFoundException):
        await service.submit(1, 11, 5)
    with pytest.raises(InvalidStateException):
        await service.submit(2, 10, 5)

    evaluation = await service.submit(1, 10, 4, comment="")
    assert evaluation.evaluator_role == "Usuario"
    assert evaluation.comment is None
    assert evaluations.rows == [evaluation]


async def test_is_evaluated_answers_false_on_store_error():
    service = EvaluationService(InMemoryEvaluations(fail=True), InMemoryTickets())

    assert await service.is_evaluated(1, 10) is False


def _stored(password):
    profile = UserProfile(
        id=1, first_name="Juan", last_name="Pérez", username="jperez",
        email=None, role_id=2, area_id=None
    )
    return StoredCredentials(profile=profile, password=password)


async def test_login_uses_injected_verifier():
    seen = []

    def verify(candidate, stored):
        seen.append((candidate, stored))
        return candidate == "ok"

    service = AccountService(InMemoryUsers({"jperez": _stored("hash")}), verify, str.upper)

    profile = await service.login("jperez", "ok")
    assert profile.username == "jperez"
    assert seen == [("ok", "hash")]

    with pytest.raises(AuthenticationException):
        await service.login("jperez", "mal")


async def test_login_missing_fields_skips_lookup():
    users = InMemoryUsers()
    service = AccountService(users, lambda c, s: True, str.upper)

    with pytest.raises(ValidationException):
        await service.login("", "x")


async def test_update_credentials_hashes_new_password():
    users = InMemoryUsers()
    service = AccountService(users, lambda c, s: True, lambda p: f"hashed:{p}")

    await service.update_credentials(1, new_password="nueva")

    assert users.updates == [(1, None, "hashed:nueva")]


async def test_update_credentials_unknown_user():
    service = AccountService(InMemoryUsers(), lambda c, s: True, str.upper)

    with pytest.raises(ResourceNotFoundException):
        await service.update_credentials(2, new_username="otro")
