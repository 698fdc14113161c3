import os
import sys
import json
import requests

BASE_URL = os.environ.get("SMOKE_URL") or os.environ.get("DEV_URL", "http://127.0.0.1:5002")
API = f"{BASE_URL.rstrip('/')}/api"

SAMPLE_DETAIL = """
<h2>District and Sessions Court, Pune</h2>
<table><caption>Case Details</caption>
<tr><td>Case Type</td><td>CRL</td></tr>
<tr><td>Registration Number</td><td>123/2021</td></tr>
<tr><td>CNR Number</td><td>MHPU010012342021</td></tr>
</table>
"""

SAMPLE_SEARCH = [
    {"cino": "MHPU010012342021", "type_name": "CRL", "case_no2": "0123", "case_year": "2021",
     "pet_name": "State", "res_name": "Ramesh", "court_name": "Pune"},
]


def get(path: str):
    r = requests.get(f"{API}{path}", timeout=10)
    r.raise_for_status()
    return r


def post(path: str, payload: dict):
    r = requests.post(f"{API}{path}", json=payload, timeout=20)
    r.raise_for_status()
    return r


def main():
    print(f"[smoke] Target: {API}")
    print("[smoke] /health:", get("/health").status_code)
    print("[smoke] /health/live:", get("/health/live").status_code)

    r = post("/parse/detail", {"source": "district", "markup": SAMPLE_DETAIL})
    print("[smoke] /parse/detail:", r.status_code, json.dumps(r.json().get("record", {}).get("identifiers")))

    r = post("/parse/search", {"source": "high", "payload": SAMPLE_SEARCH})
    print("[smoke] /parse/search:", r.status_code, json.dumps(r.json(), indent=2)[:300])

    r = post("/tracking/check", {"rows": SAMPLE_SEARCH, "tracked": [{"type_name": "CRL", "case_no2": "123", "case_year": "2021"}]})
    print("[smoke] /tracking/check:", r.status_code, r.json().get("tracked"))


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print("[smoke] FAILED:", e)
        sys.exit(1)
