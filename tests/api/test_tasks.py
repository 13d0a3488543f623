"""Tests for task endpoints"""
import pytest


@pytest.mark.asyncio
async def test_list_default_tasks(api_client):
    """Test the seeded task list is served in camelCase"""
    response = await api_client.get("/api/tasks")

    assert response.status_code == 200
    data = response.json()
    assert [t["id"] for t in data] == ["1", "2", "3", "4"]
    assert data[0]["title"] == "GATE Exam Preparation"
    assert data[0]["timeSlots"] == 3
    assert data[0]["isActive"] is True
    assert "createdAt" in data[0]
    assert "time_slots" not in data[0]


@pytest.mark.asyncio
async def test_create_task(api_client):
    """Test creating a task with camelCase fields"""
    response = await api_client.post(
        "/api/tasks",
        json={"title": "Evening Run", "emoji": "🏃", "category": "exercise", "timeSlots": 2}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["timeSlots"] == 2
    assert data["color"] == "#3B82F6"
    assert data["isActive"] is True

    listed = await api_client.get("/api/tasks")
    assert data["id"] in [t["id"] for t in listed.json()]


@pytest.mark.asyncio
async def test_create_task_missing_title(api_client):
    """Test a task without a title is rejected with 400"""
    response = await api_client.post("/api/tasks", json={"emoji": "🏃", "category": "exercise"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid request data"
    assert isinstance(data["details"], list)


@pytest.mark.asyncio
async def test_create_task_invalid_time_slots(api_client):
    response = await api_client.post(
        "/api/tasks",
        json={"title": "Run", "emoji": "🏃", "category": "exercise", "timeSlots": 0}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_task(api_client):
    response = await api_client.get("/api/tasks/3")

    assert response.status_code == 200
    assert response.json()["title"] == "Coding Practice"


@pytest.mark.asyncio
async def test_get_unknown_task(api_client):
    response = await api_client.get("/api/tasks/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"] == "Task not found"


@pytest.mark.asyncio
async def test_update_task_partial(api_client):
    """Test PATCH merges only the fields that were sent"""
    response = await api_client.patch("/api/tasks/2", json={"timeSlots": 2, "description": None})

    assert response.status_code == 200
    data = response.json()
    assert data["timeSlots"] == 2
    assert data["description"] is None
    assert data["title"] == "Yoga & Meditation"


@pytest.mark.asyncio
async def test_update_task_rejects_null_title(api_client):
    response = await api_client.patch("/api/tasks/2", json={"title": None})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_unknown_task(api_client):
    response = await api_client.patch("/api/tasks/missing", json={"title": "x"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_task_hides_it(api_client):
    """Test DELETE is a soft delete"""
    response = await api_client.delete("/api/tasks/1")

    assert response.status_code == 204

    listed = await api_client.get("/api/tasks")
    assert "1" not in [t["id"] for t in listed.json()]

    # Still retrievable by id, marked inactive
    task = await api_client.get("/api/tasks/1")
    assert task.status_code == 200
    assert task.json()["isActive"] is False


@pytest.mark.asyncio
async def test_delete_unknown_task(api_client):
    response = await api_client.delete("/api/tasks/missing")

    assert response.status_code == 404
