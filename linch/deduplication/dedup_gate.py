import threading
from typing import Set, Dict


class DeduplicationGate:
    """Lets each distinct URL through exactly once per run

    Keys are the URL text as extracted (surrounding whitespace removed).
    No canonicalization is applied so fix commands can substitute the
    exact text found in the source file.
    """

    def __init__(self):
        self.claimed_urls: Set[str] = set()
        self._lock = threading.Lock()

        # Statistics
        self.stats = {
            'urls_processed': 0,
            'duplicate_urls': 0
        }

    @staticmethod
    def normalize(url: str) -> str:
        return url.strip()

    def try_claim(self, url: str) -> bool:
        """
        Atomically claim a URL for validation

        Args:
            url: URL text to claim

        Returns:
            True the first time a URL is seen, False on every later call
        """
        key = self.normalize(url)
        with self._lock:
            self.stats['urls_processed'] += 1
            if key in self.claimed_urls:
                self.stats['duplicate_urls'] += 1
                return False
            self.claimed_urls.add(key)
            return True

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                **self.stats,
                'unique_urls': len(self.claimed_urls)
            }
