def _workout(**extra):
    return {
        "name": "Strength Base",
        "goal": "Build strength",
        "duration": 4,
        "level": "beginner",
        "weeks": [
            {
                "weekNumber": 1,
                "days": [
                    {"dayNumber": 1, "exercises": [{"name": "Squat", "sets": 5, "reps": 5, "restTime": 120}]},
                ],
            }
        ],
        **extra,
    }


def test_workout_plan_crud(client, gym_owner):
    headers, _ = gym_owner
    created = client.post("/api/workout-plans", json=_workout(), headers=headers)
    assert created.status_code == 201, created.text
    plan = created.json()["plan"]
    assert plan["weeks"][0]["days"][0]["exercises"][0]["restTime"] == 120

    updated = client.put(f"/api/workout-plans/{plan['id']}", json={"level": "advanced"}, headers=headers)
    assert updated.json()["plan"]["level"] == "advanced"

    assert len(client.get("/api/workout-plans", headers=headers).json()["plans"]) == 1
    assert client.delete(f"/api/workout-plans/{plan['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/workout-plans/{plan['id']}", headers=headers).status_code == 404


def test_workout_plan_validation(client, gym_owner):
    headers, _ = gym_owner
    bad_sets = _workout()
    bad_sets["weeks"][0]["days"][0]["exercises"][0]["sets"] = 0
    assert client.post("/api/workout-plans", json=bad_sets, headers=headers).status_code == 400
    assert client.post("/api/workout-plans", json=_workout(duration=0), headers=headers).status_code == 400
    assert client.post("/api/workout-plans", json=_workout(level="elite"), headers=headers).status_code == 400


def test_assign_workout_plan(client, gym_owner, customer):
    headers, _ = gym_owner
    plan = client.post("/api/workout-plans", json=_workout(), headers=headers).json()["plan"]

    missing = client.post("/api/workout-plans/assign", json={"memberId": customer["id"]}, headers=headers)
    assert missing.status_code == 400
    assert missing.json()["message"] == "Missing required fields"

    body = {"memberId": customer["id"], "memberName": "Jane Doe", "startDate": "2026-02-01"}
    unknown = client.post("/api/workout-plans/assign", json={**body, "planId": 999}, headers=headers)
    assert unknown.status_code == 404

    res = client.post("/api/workout-plans/assign", json={**body, "planId": plan["id"]}, headers=headers)
    assert res.status_code == 201, res.text
    assigned = res.json()["assignedPlan"]
    assert assigned["plan"]["name"] == "Strength Base"

    listed = client.get("/api/workout-plans/assigned", headers=headers).json()["assignedPlans"]
    assert [a["id"] for a in listed] == [assigned["id"]]

    assert client.delete(f"/api/workout-plans/assigned/{assigned['id']}", headers=headers).status_code == 200
    assert client.get("/api/workout-plans/assigned", headers=headers).json()["assignedPlans"] == []


def test_nutrition_plan_crud(client, gym_owner, customer):
    headers, _ = gym_owner
    body = {
        "user_id": str(customer["id"]),
        "plan_name": "Lean Bulk",
        "total_calories": 2800,
        "protein_target": 180,
        "carbs_target": 300,
        "fat_target": 80,
        "meals": [
            {
                "meal_type": "Breakfast",
                "time": "08:00",
                "calories": 700,
                "items": [{"food_name": "Oats", "quantity": "100g", "calories": 380, "protein": 13, "carbs": 67, "fat": 7}],
            }
        ],
    }
    created = client.post("/api/nutrition-plans", json=body, headers=headers)
    assert created.status_code == 201, created.text
    plan = created.json()["plan"]
    assert plan["user_id"] == str(customer["id"])
    assert plan["meals"][0]["items"][0]["food_name"] == "Oats"

    updated = client.put(f"/api/nutrition-plans/{plan['id']}", json={"total_calories": 2600}, headers=headers)
    assert updated.json()["plan"]["total_calories"] == 2600

    assert client.delete(f"/api/nutrition-plans/{plan['id']}", headers=headers).status_code == 200
    assert client.get("/api/nutrition-plans", headers=headers).json()["plans"] == []


def test_nutrition_plan_validates_items(client, gym_owner):
    headers, _ = gym_owner
    body = {
        "user_id": "1", "plan_name": "X", "total_calories": 1, "protein_target": 1, "carbs_target": 1,
        "fat_target": 1, "meals": [{"meal_type": "Lunch", "time": "12:00", "calories": 1, "items": [{"food_name": "Rice"}]}],
    }
    assert client.post("/api/nutrition-plans", json=body, headers=headers).status_code == 400


def test_staff_crud(client, gym_owner):
    headers, _ = gym_owner
    assert client.post("/api/staff", json={"name": "Kim"}, headers=headers).status_code == 400

    created = client.post("/api/staff", json={"name": "Kim", "position": "Trainer", "experience": 3}, headers=headers)
    assert created.status_code == 201
    staff = created.json()["staff"]
    assert staff["status"] == "Active"

    updated = client.put(f"/api/staff/{staff['id']}", json={"status": "On Leave"}, headers=headers)
    assert updated.json()["staff"]["status"] == "On Leave"

    assert len(client.get("/api/staff", headers=headers).json()["staff"]) == 1
    assert client.delete(f"/api/staff/{staff['id']}", headers=headers).status_code == 200
