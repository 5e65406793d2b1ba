#!/usr/bin/env python3
"""
Smoke check for a running web API.
Start the server first (asset-browser web), then run:

    python debug_endpoints.py [asset folder] [base url]
"""

import sys

import requests


def check_endpoint(base_url, method, path, data=None):
    """Call one endpoint and report the status code."""
    url = base_url + path
    try:
        response = requests.request(method, url, json=data, timeout=30)
        marker = "✓" if response.status_code < 400 else "✗"
        print(f"{marker} {method} {path} -> {response.status_code}")
        return response

    except requests.exceptions.ConnectionError:
        print(f"✗ {method} {path} -> Connection refused (server not running?)")
    except requests.exceptions.Timeout:
        print(f"✗ {method} {path} -> Timeout")
    return None


def main():
    folder = sys.argv[1] if len(sys.argv) > 1 else None
    base_url = sys.argv[2] if len(sys.argv) > 2 else "http://localhost:5000"

    print("Checking Game Asset Browser endpoints")
    print("=" * 50)

    if check_endpoint(base_url, "GET", "/api/health") is None:
        print("\nMake sure the web server is running: asset-browser web --debug")
        return 1

    if folder:
        response = check_endpoint(base_url, "POST", "/api/scan", {"path": folder})
        if response is not None and response.ok:
            result = response.json()
            print(f"  {result['status']} ({result['total_files']} files seen, "
                  f"{result['skipped_count']} skipped, aborted={result['aborted']})")

    endpoints = [
        ("GET", "/api/summary", None),
        ("GET", "/api/categories", None),
        ("GET", "/api/tags", None),
        ("GET", "/api/sort-options", None),
        ("GET", "/api/assets", None),
        ("PUT", "/api/filters", {"category": "Image", "sort_key": "Size (Largest)"}),
        ("POST", "/api/search/clear", None),
        ("POST", "/api/filters/clear", None),
        ("GET", "/api/status", None),
    ]

    failures = 0
    for method, path, data in endpoints:
        response = check_endpoint(base_url, method, path, data)
        if response is None or not response.ok:
            failures += 1

    status = requests.get(f"{base_url}/api/status", timeout=5).json()
    print("\n" + "=" * 50)
    print(f"Status: {status['status']}")
    print(f"Results: {len(endpoints) - failures}/{len(endpoints)} endpoints working")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
