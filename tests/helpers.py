from httpx import AsyncClient

PASSWORD = "correct-horse-battery"
DESCRIPTION = "Rent panels to homeowners"  # 25 chars


async def register(client: AsyncClient, email: str, password: str = PASSWORD, **extra):
    return await client.post("/api/register", json={"email": email, "password": password, **extra})


async def login(client: AsyncClient, email: str, password: str = PASSWORD):
    return await client.post("/api/login", json={"email": email, "password": password})


async def submit(client: AsyncClient, title: str = "Solar panel rental", description: str = DESCRIPTION):
    r = await client.post("/api/ideas", json={"title": title, "description": description})
    assert r.status_code == 201, r.text
    return r.json()


async def approve(admin: AsyncClient, idea_id: int, status: str = "approved"):
    r = await admin.put(f"/api/admin/ideas/{idea_id}/status", json={"status": status})
    assert r.status_code == 200, r.text
    return r.json()
