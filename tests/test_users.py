"""
Tests for profile, address and catalog endpoints
"""

from petcare.models import Address


class TestProfile:
    def test_get_profile(self, client, make_user, auth_headers):
        user = make_user(name="Priya", email="priya@example.com")

        response = client.get("/api/user/profile", headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["id"] == user.id
        assert data["data"]["phone"] == user.phone
        assert data["data"]["isOnboarded"] is False

    def test_update_profile_completes_onboarding(self, client, db_session, make_user, auth_headers):
        user = make_user(name=None)

        response = client.put(
            "/api/user/profile",
            json={"name": "Priya", "email": "Priya@Example.com", "fcmToken": "device-token"},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Priya"
        assert data["email"] == "priya@example.com"
        assert data["isOnboarded"] is True
        db_session.refresh(user)
        assert user.fcm_token == "device-token"

    def test_partial_update_keeps_other_fields(self, client, make_user, auth_headers):
        user = make_user(name="Priya", email="priya@example.com")

        response = client.put(
            "/api/user/profile", json={"address": "Flat 4, MG Road"}, headers=auth_headers(user)
        )

        data = response.json()["data"]
        assert data["address"] == "Flat 4, MG Road"
        assert data["email"] == "priya@example.com"

    def test_invalid_email(self, client, make_user, auth_headers):
        response = client.put(
            "/api/user/profile", json={"email": "not-an-email"}, headers=auth_headers(make_user())
        )

        assert response.status_code == 400


class TestAddress:
    def _payload(self, **overrides):
        payload = {
            "line1": "12 MG Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "postalCode": "560001",
            "latitude": 12.97,
            "longitude": 77.59,
        }
        payload.update(overrides)
        return payload

    def test_get_default_address_by_phone(self, client, make_user, make_address):
        user = make_user()
        address = make_address(user)

        response = client.get("/api/user/address", params={"phone": user.phone})

        assert response.status_code == 200
        assert response.json()["id"] == address.id
        assert response.json()["postalCode"] == "560001"

    def test_get_requires_user_or_phone(self, client):
        assert client.get("/api/user/address").status_code == 400

    def test_get_unknown_phone(self, client):
        response = client.get("/api/user/address", params={"phone": "+911111111111"})

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    def test_get_without_address(self, client, make_user):
        response = client.get("/api/user/address", params={"userId": make_user().id})

        assert response.status_code == 404
        assert response.json()["error"] == "Address not found"

    def test_put_creates_then_updates_default(self, client, db_session, make_user):
        user = make_user()

        created = client.put("/api/user/address", json=self._payload(userId=user.id))
        updated = client.put("/api/user/address", json=self._payload(userId=user.id, city="Mysuru"))

        assert created.status_code == 200
        assert created.json()["address"]["country"] == "India"
        assert updated.json()["address"]["id"] == created.json()["address"]["id"]
        assert updated.json()["address"]["city"] == "Mysuru"
        assert db_session.query(Address).filter_by(user_id=user.id).count() == 1

    def test_unknown_user_id_writes_nothing(self, client, db_session):
        put = client.put("/api/user/address", json=self._payload(userId="no-such-user"))
        post = client.post("/api/user/address", json=self._payload(userId="no-such-user"))

        assert put.status_code == 404
        assert put.json()["error"] == "User not found"
        assert post.status_code == 404
        assert db_session.query(Address).count() == 0

    def test_put_requires_address_fields(self, client, make_user):
        response = client.put("/api/user/address", json={"userId": make_user().id, "line1": "12 MG Road"})

        assert response.status_code == 400
        assert "postalCode" in response.json()["error"]

    def test_post_new_default_replaces_previous(self, client, db_session, make_user, make_address):
        user = make_user()
        old = make_address(user)

        response = client.post(
            "/api/user/address", json=self._payload(userId=user.id, isDefault=True, country="Nepal")
        )

        assert response.status_code == 201
        assert response.json()["isDefault"] is True
        assert response.json()["country"] == "Nepal"
        db_session.refresh(old)
        assert old.is_default is False


class TestCatalog:
    def test_lists_active_services_by_name(self, client, make_service):
        make_service(name="Pet Sitting", category="sitting")
        make_service(name="Dog Walking", category="walking")
        make_service(name="Grooming", is_active=False)

        response = client.get("/api/services")

        assert [s["name"] for s in response.json()] == ["Dog Walking", "Pet Sitting"]

    def test_filters_services_by_category(self, client, make_service):
        make_service(name="Pet Sitting", category="sitting")
        make_service(name="Dog Walking", category="walking")

        response = client.get("/api/services", params={"category": "sitting"})

        assert [s["name"] for s in response.json()] == ["Pet Sitting"]

    def test_add_and_list_pets(self, client, make_user, auth_headers):
        user = make_user()
        headers = auth_headers(user)

        created = client.post("/api/pets", json={"name": "Milo", "type": "cat"}, headers=headers)
        listed = client.get("/api/pets", headers=headers)

        assert created.status_code == 201
        assert [p["name"] for p in listed.json()] == ["Milo"]

    def test_pet_requires_name_and_type(self, client, make_user, auth_headers):
        response = client.post("/api/pets", json={"name": "Milo"}, headers=auth_headers(make_user()))

        assert response.status_code == 400
