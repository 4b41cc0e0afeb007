import requests


class DocumentStoreClient:
    def __init__(self, base_url="http://localhost:5001", timeout=30.0, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def append(self, collection, document):
        data = {"data": document}
        response = self.session.post(f"{self.base_url}/api/{collection}", json=data, timeout=self.timeout)
        response.raise_for_status()
        return response.json()["id"]

    def query(self, collection, order_by, descending=True):
        params = {"order_by": order_by, "direction": "desc" if descending else "asc"}
        response = self.session.get(f"{self.base_url}/api/{collection}", params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()
