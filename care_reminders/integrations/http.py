import requests


class ApiClient:
	"""Shared plumbing for the scheduling platform's HTTP endpoints.

	The base URL and timeout are fixed at construction; pass ``session`` to
	share a connection pool (or a stand-in) between clients.
	"""

	def __init__(self, base_url: str, timeout: float = 10.0, session: requests.Session | None = None):
		self.base_url = base_url.rstrip("/")
		self.timeout = timeout
		self.session = session or requests.Session()

	def url(self, path: str) -> str:
		return f"{self.base_url}/{path.lstrip('/')}"
