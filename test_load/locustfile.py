from locust import HttpUser, task, between
import random

SEARCH_TERMS = ["oku", "to", "need", "a", "ha"]

class LoadTest(HttpUser):
    wait_time = between(1, 2)

    @task(3)
    def list_words(self):
        page = random.randint(1, 10)
        limit = random.choice([10, 20, 50])

        self.client.get(
            "/api/words",
            params={"page": page, "limit": limit},
            headers={"accept": "application/json"}
        )

    @task(2)
    def search_words(self):
        self.client.get(
            "/api/words/search",
            params={"q": random.choice(SEARCH_TERMS)},
            headers={"accept": "application/json"}
        )

    @task(1)
    def get_word(self):
        # 404s are expected for unknown words
        with self.client.get(
            "/api/words/okuhepa",
            headers={"accept": "application/json"},
            catch_response=True,
            name="/api/words/[word]",
        ) as response:
            if response.status_code in (200, 404):
                response.success()
