"""Basic Locust profile for mixed encode/redirect/statistic/search operations.

Each simulated user keeps a pool of the codes it created so redirect and
statistic traffic hits live records. A small share of deletes keeps the
registry from growing without bound during long runs.

    locust -f stress/locustfile.py --host http://localhost:3000
"""

import random

from locust import HttpUser, between, task

MAX_CODES_PER_USER = 200
SEARCH_TERMS = ["example", "page", "docs", "ex"]


class UrlShortenerUser(HttpUser):
    """Mixed workload user for local functional load checks."""

    wait_time = between(0.1, 0.5)

    def on_start(self) -> None:
        self.codes: list[str] = []

    @task(2)
    def encode(self) -> None:
        """Create new short URLs and add successful codes to user cache."""

        url = f"https://example.com/page/{random.randint(1, 1000000)}"
        response = self.client.post("/api/encode", json={"url": url}, name="POST /api/encode")

        if response.status_code == 201:
            short_code = response.json().get("short_code")
            if short_code:
                self.codes.append(short_code)
                if len(self.codes) > MAX_CODES_PER_USER:
                    self.codes = self.codes[-MAX_CODES_PER_USER:]

    @task(6)
    def redirect(self) -> None:
        if not self.codes:
            self.encode()
            return

        short_code = random.choice(self.codes)
        self.client.get(f"/{short_code}", name="GET /:code", allow_redirects=False)

    @task(2)
    def statistic(self) -> None:
        if not self.codes:
            self.encode()
            return

        short_code = random.choice(self.codes)
        self.client.get(f"/api/statistic/{short_code}", name="GET /api/statistic/:code")

    @task(1)
    def search(self) -> None:
        self.client.get("/api/search", params={"q": random.choice(SEARCH_TERMS)}, name="GET /api/search")

    @task(1)
    def delete(self) -> None:
        if len(self.codes) < 10:
            return

        short_code = self.codes.pop(0)
        self.client.delete(f"/{short_code}", name="DELETE /:code")
