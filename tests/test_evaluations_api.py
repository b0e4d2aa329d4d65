from sqlalchemy.exc import OperationalError

from src.main import app
from src.infrastructure.database import get_session


class BrokenSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("server unavailable"))

    async def commit(self):
        pass

    async def rollback(self):
        pass


async def broken_session():
    yield BrokenSession()


def test_submit_evaluation_for_closed_ticket(client, make_user, make_ticket, fetch_evaluations):
    owner = make_user()
    ticket_id = make_ticket(owner, status="Cerrado")

    resp = client.post(
        "/movil/evaluaciones",
        json={"id_ticket": ticket_id, "id_usuario": owner, "calificacion": 5, "comentario": "Rápido"},
    )

    assert resp.status_code == 200, resp.json()
    assert resp.json() == {"mensaje": "Evaluación registrada correctamente"}
    [evaluation] = fetch_evaluations(ticket_id)
    assert evaluation.user_id == owner
    assert evaluation.rating == 5
    assert evaluation.comment == "Rápido"
    assert evaluation.evaluator_role == "Usuario"


def test_submit_evaluation_without_comment(client, make_user, make_ticket, fetch_evaluations):
    owner = make_user()
    ticket_id = make_ticket(owner, status="Cerrado")

    resp = client.post(
        "/movil/evaluaciones",
        json={"id_ticket": ticket_id, "id_usuario": owner, "calificacion": 3},
    )

    assert resp.status_code == 200
    assert fetch_evaluations(ticket_id)[0].comment is None


def test_submit_evaluation_open_ticket(client, make_user, make_ticket, fetch_evaluations):
    owner = make_user()
    ticket_id = make_ticket(owner, status="En proceso")

    resp = client.post(
        "/movil/evaluaciones",
        json={"id_ticket": ticket_id, "id_usuario": owner, "calificacion": 4},
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Solo se pueden evaluar tickets cerrados"}
    assert fetch_evaluations(ticket_id) == []


def test_submit_evaluation_for_someone_elses_ticket(client, make_user, make_ticket, fetch_evaluations):
    owner = make_user()
    stranger = make_user(username="intruso")
    ticket_id = make_ticket(owner, status="Cerrado")

    resp = client.post(
        "/movil/evaluaciones",
        json={"id_ticket": ticket_id, "id_usuario": stranger, "calificacion": 1},
    )

    assert resp.status_code == 404
    assert resp.json() == {"error": "Ticket no encontrado o no pertenece al usuario"}
    assert fetch_evaluations(ticket_id) == []


def test_submit_evaluation_unknown_ticket(client, make_user):
    owner = make_user()

    resp = client.post(
        "/movil/evaluaciones",
        json={"id_ticket": 999, "id_usuario": owner, "calificacion": 5},
    )

    assert resp.status_code == 404


def test_submit_evaluation_missing_rating(client):
    resp = client.post("/movil/evaluaciones", json={"id_ticket": 1, "id_usuario": 1})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Faltan campos obligatorios"}


def test_submit_evaluation_store_failure(client):
    app.dependency_overrides[get_session] = broken_session

    resp = client.post(
        "/movil/evaluaciones",
        json={"id_ticket": 1, "id_usuario": 1, "calificacion": 5},
    )

    assert resp.status_code == 500
    assert resp.json() == {"error": "Error al registrar la evaluación"}


def test_check_evaluation_before_and_after(client, make_user, make_ticket):
    owner = make_user()
    ticket_id = make_ticket(owner, status="Cerrado")

    before = client.get(f"/movil/evaluaciones/verificar/{ticket_id}/{owner}")
    client.post(
        "/movil/evaluaciones",
        json={"id_ticket": ticket_id, "id_usuario": owner, "calificacion": 5},
    )
    after = client.get(f"/movil/evaluaciones/verificar/{ticket_id}/{owner}")

    assert before.status_code == 200
    assert before.json() == {"evaluado": False}
    assert after.json() == {"evaluado": True}


def test_check_evaluation_swallows_store_errors(client):
    app.dependency_overrides[get_session] = broken_session

    resp = client.get("/movil/evaluaciones/verificar/1/1")

    assert resp.status_code == 200
    assert resp.json() == {"evaluado": False}
