#!/usr/bin/env python3
"""
Smoke-test a running link shortener over HTTP.

Usage:
    python validate_service.py --url http://localhost:3005
"""

import argparse
import sys
import time
from datetime import datetime
from typing import List, Optional, Tuple

import requests


class ServiceValidator:
    """Validates link shortener endpoints against a live deployment."""

    def __init__(self, base_url: str = "http://localhost:3005", timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.test_results: List[Tuple[str, bool]] = []

    def print_header(self, text: str):
        print(f"\n{'=' * 60}")
        print(f"  {text}")
        print(f"{'=' * 60}\n")

    def record(self, name: str, passed: bool, details: str = ""):
        """Record and print a check result."""
        self.test_results.append((name, passed))
        print(f"{'PASS' if passed else 'FAIL'} - {name}")
        if details:
            print(f"       {details}")

    def _shorten(self, payload: dict) -> requests.Response:
        return self.session.post(f"{self.base_url}/shorten", json=payload, timeout=self.timeout)

    def check_health(self) -> bool:
        try:
            response = self.session.get(f"{self.base_url}/api/health", timeout=self.timeout)
        except requests.RequestException as e:
            self.record("Health Check", False, f"Error: {e}")
            return False

        healthy = response.status_code == 200 and response.json().get("status") == "healthy"
        self.record("Health Check", healthy, f"Status: {response.status_code}")
        return healthy

    def check_create(self) -> Optional[str]:
        long_url = f"https://example.com/validate/{int(time.time())}"
        response = self._shorten({"longUrl": long_url})

        if response.status_code != 201:
            self.record("Create Short Link", False, f"Status: {response.status_code}")
            return None

        data = response.json()
        ok = data.get("longUrl") == long_url and data.get("clicks") == 0 and "creatorIp" not in data
        self.record("Create Short Link", ok, f"Short URL: {data.get('shortUrl')}")
        return data.get("shortCode") if ok else None

    def check_redirect_counts_click(self, short_code: str) -> bool:
        response = self.session.get(
            f"{self.base_url}/{short_code}",
            allow_redirects=False,
            timeout=self.timeout,
        )
        redirected = response.status_code == 302
        self.record("Redirect", redirected, f"Location: {response.headers.get('Location')}")
        if not redirected:
            return False

        # Clicks are counted in the background; give the store a moment
        for _ in range(10):
            details = self.session.get(
                f"{self.base_url}/api/links/{short_code}", timeout=self.timeout
            ).json()
            if details.get("clicks") == 1:
                self.record("Click Counted", True, "clicks=1")
                return True
            time.sleep(0.2)

        self.record("Click Counted", False, f"clicks={details.get('clicks')}")
        return False

    def check_duplicate_alias(self) -> bool:
        alias = f"validate-{int(time.time())}"
        first = self._shorten({"longUrl": "https://example.com/first", "customAlias": alias})
        second = self._shorten({"longUrl": "https://example.com/second", "customAlias": alias})

        ok = first.status_code == 201 and second.status_code == 409
        self.record(
            "Duplicate Alias Rejection",
            ok,
            f"Status: {first.status_code}, {second.status_code} (expected 201, 409)",
        )
        return ok

    def check_rejections(self) -> bool:
        cases = [
            ("Invalid URL Rejection", {"longUrl": "not-a-url"}, 400),
            ("Short Alias Rejection", {"longUrl": "https://x.com", "customAlias": "ab"}, 400),
        ]
        all_ok = True
        for name, payload, expected in cases:
            response = self._shorten(payload)
            ok = response.status_code == expected
            self.record(name, ok, f"Status: {response.status_code} (expected {expected})")
            all_ok = all_ok and ok

        response = self.session.get(f"{self.base_url}/api/links/missing-code-999", timeout=self.timeout)
        ok = response.status_code == 404
        self.record("Unknown Code", ok, f"Status: {response.status_code} (expected 404)")
        return all_ok and ok

    def run_all(self) -> bool:
        self.print_header("Link Shortener Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.check_health():
            print(f"\nHealth check failed. Make sure the service is accessible at {self.base_url}")
            return False

        short_code = self.check_create()
        if short_code:
            self.check_redirect_counts_click(short_code)

        self.check_duplicate_alias()
        self.check_rejections()

        self.print_summary()
        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)

        self.print_header("Summary")
        print(f"Total:  {total}")
        print(f"Passed: {passed}")
        print(f"Failed: {total - passed}")

        for name, ok in self.test_results:
            if not ok:
                print(f"   - {name}")


def main():
    parser = argparse.ArgumentParser(description="Validate link shortener service functionality")
    parser.add_argument(
        "--url",
        default="http://localhost:3005",
        help="Base URL of the service (default: http://localhost:3005)"
    )
    args = parser.parse_args()

    validator = ServiceValidator(args.url)

    try:
        sys.exit(0 if validator.run_all() else 1)
    except KeyboardInterrupt:
        print("\nValidation interrupted by user")
        sys.exit(2)
    except requests.RequestException as e:
        print(f"\nValidation failed with error: {e}")
        sys.exit(3)


if __name__ == "__main__":
    main()
