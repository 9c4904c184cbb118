# scripts/test/simulate_visit.py
"""Drive one lorry through check-in → notify → release against a running backend."""

import argparse
import time
import requests

BACKEND_URL = "http://localhost:8080/api/v1"


def _post(path, operator, payload=None):
    resp = requests.post(f"{BACKEND_URL}{path}", json=payload,
                         headers={"X-Operator-Id": operator} if operator else {}, timeout=10)
    body = resp.json()
    print(f"✅ POST {path} → HTTP {resp.status_code}")
    for event in body.get("events", []):
        print(f"   📣 {event['kind']}: {event['payload']}")
    if body.get("message"):
        print(f"   📱 {body['message']}")
    resp.raise_for_status()
    return body


def simulate(reg, po, pager, quoted, operator, wait):
    checked_in = _post("/vehicles", operator, {
        "registration": reg, "po_ref": po, "pager_number": pager, "quoted_minutes": quoted,
    })
    vehicle_id = checked_in["vehicle_id"]
    time.sleep(wait)
    _post(f"/vehicles/{vehicle_id}/notify", operator)
    time.sleep(wait)
    _post(f"/vehicles/{vehicle_id}/release", operator)

    history = requests.get(f"{BACKEND_URL}/vehicles/{vehicle_id}/sms-history", timeout=10).json()
    print(f"\n📜 SMS history for {reg}: {len(history)} messages")
    for sms in history:
        print(f"   {sms['timestamp']}  {sms['message_type']:<9} → {sms['recipient_phone']}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate a yard visit for testing")
    parser.add_argument("--reg", default="AB12CDE")
    parser.add_argument("--po", default="PO-100")
    parser.add_argument("--pager", default="07000000000")
    parser.add_argument("--quoted", type=int, default=30)
    parser.add_argument("--operator", default=None, help="Operator id sent as X-Operator-Id")
    parser.add_argument("--wait", type=float, default=1.0, help="Seconds between steps")
    args = parser.parse_args()

    simulate(args.reg, args.po, args.pager, args.quoted, args.operator, args.wait)
