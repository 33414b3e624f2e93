def test_login_form(client):
    res = client.get("/admin/login")
    assert res.status_code == 200
    assert 'action="/admin/login"' in res.text


def test_login_form_redirects_when_signed_in(admin_client):
    res = admin_client.get("/admin/login", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/admin/dashboard"


def test_login_form_post(client, admin_user, admin_password, cookie_name):
    res = client.post(
        "/admin/login",
        data={"username": "admin", "password": admin_password},
        follow_redirects=False,
    )
    assert res.status_code == 303
    assert res.headers["location"] == "/admin/dashboard"
    assert cookie_name in res.cookies


def test_login_form_post_wrong_password(client, admin_user):
    res = client.post("/admin/login", data={"username": "admin", "password": "bad"})
    assert res.status_code == 401
    assert "Invalid credentials" in res.text
    assert 'value="admin"' in res.text


def test_dashboard_without_cookie_redirects(client):
    res = client.get("/admin/dashboard", follow_redirects=False)
    assert res.status_code == 307
    assert res.headers["location"] == "http://testserver/admin/login"


def test_dashboard_lists_tenants(admin_client, tenant):
    res = admin_client.get("/admin/dashboard")
    assert res.status_code == 200
    assert "Acme Cooling" in res.text
    assert "acme.example.com" in res.text
    assert 'value="basic-ac-service"' in res.text


def test_admin_root_is_dashboard(admin_client):
    res = admin_client.get("/admin")
    assert res.status_code == 200
    assert "Tenant websites" in res.text


def test_expired_session_clears_cookie(client, cookie_name):
    client.cookies.set(cookie_name, "expired-or-forged")
    res = client.get("/admin/enquiries", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/admin/login"
    assert f'{cookie_name}=""' in res.headers["set-cookie"]


def test_enquiries_page(admin_client, tenant, db):
    from models import Enquiry

    db.add(Enquiry(tenant_id=tenant.id, name="Jane", email="jane@x.test", message="Help!", status="new"))
    db.commit()

    res = admin_client.get("/admin/enquiries", params={"tenantSlug": "acme"})
    assert res.status_code == 200
    assert "Help!" in res.text
    assert "jane@x.test" in res.text


def test_enquiries_page_without_tenants(admin_client):
    res = admin_client.get("/admin/enquiries")
    assert res.status_code == 200
    assert "No sites yet." in res.text


def test_logout(admin_client, cookie_name):
    res = admin_client.get("/admin/logout", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/admin/login"
    assert f'{cookie_name}=""' in res.headers["set-cookie"]
