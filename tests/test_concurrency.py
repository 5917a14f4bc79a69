import unittest
import threading
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

from romanmath import evaluate, ParseError

CASES = {
    "X-V+V*IV": 25,
    "(X-V+V)*IV": 40,
    "MCMXCIV": 1994,
    "((II*III)-(IV+I))*X": 10,
}


class TestParserConcurrency(unittest.TestCase):
    """
    Verify evaluate() is safe to call from many threads at once.
    """

    def test_concurrent_evaluation(self):
        exceptions = []
        results = []
        barrier = threading.Barrier(20)

        def runner():
            try:
                barrier.wait()
                for _ in range(25):
                    results.append({expr: evaluate(expr) for expr in CASES})
            except Exception as e:
                exceptions.append(e)

        threads = []
        for _ in range(20):
            t = threading.Thread(target=runner)
            threads.append(t)
            t.start()

        for t in threads:
            t.join()

        self.assertEqual(len(exceptions), 0, f"Exceptions occurred: {exceptions}")
        self.assertEqual(len(results), 20 * 25)
        for r in results:
            self.assertEqual(r, CASES, "Concurrent evaluation produced a different result!")

    def test_failures_do_not_leak_between_threads(self):
        # A failing parse on one thread must not disturb parses on another
        outcomes = []

        def good():
            for _ in range(50):
                outcomes.append(evaluate("XL+II") == 42)

        def bad():
            for _ in range(50):
                try:
                    evaluate("XL/II")
                    outcomes.append(False)
                except ParseError:
                    outcomes.append(True)

        threads = [threading.Thread(target=f) for f in (good, bad, good, bad)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(outcomes), 200)
        self.assertTrue(all(outcomes))


if __name__ == "__main__":
    unittest.main()
