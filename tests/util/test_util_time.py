import unittest
from datetime import datetime, timedelta, timezone

from sharemirror.util.time import now_utc, to_rfc3339


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_aware(self) -> None:
        self.assertEqual(now_utc().tzinfo, timezone.utc)

    def test_to_rfc3339_converts_to_utc(self) -> None:
        dt = datetime(2025, 1, 1, 9, 0, 0, tzinfo=timezone(timedelta(hours=9)))
        self.assertEqual(to_rfc3339(dt), "2025-01-01T00:00:00Z")

    def test_naive_rejected(self) -> None:
        with self.assertRaises(ValueError):
            to_rfc3339(datetime(2025, 1, 1))


if __name__ == "__main__":
    unittest.main()
