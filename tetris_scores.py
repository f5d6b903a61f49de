"""High-score ledger: flat file of newline-separated integers"""
import logging
from typing import List, Tuple

from tetris_config import MAX_HIGH_SCORES

log = logging.getLogger(__name__)


def merge_score(scores: List[int], score: int, limit: int = MAX_HIGH_SCORES) -> Tuple[List[int], int]:
    """Add score to the ledger, keep the top `limit` and return (ledger, rank).

    Rank is 1-based, taken from the first entry equal to score. A score that
    fell off the end ranks len(ledger) + 1.
    """
    ledger = sorted(list(scores) + [score], reverse=True)[:limit]
    rank = 1
    for s in ledger:
        if s == score:
            break
        rank += 1
    return ledger, rank


class HighScoreStore:
    def __init__(self, path: str, limit: int = MAX_HIGH_SCORES):
        self.path = path
        self.limit = limit

    def load(self) -> List[int]:
        """Scores in descending order; [] if the file can't be read."""
        scores = []
        try:
            with open(self.path, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        scores.append(int(line))
                    except ValueError:
                        log.debug("skipping malformed high score entry %r", line)
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            log.warning("could not read high scores from %s: %s", self.path, e)
            return []
        scores.sort(reverse=True)
        return scores

    def save(self, scores: List[int]) -> bool:
        ledger = sorted(scores, reverse=True)[:self.limit]
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.writelines(f"{s}\n" for s in ledger)
        except OSError as e:
            log.warning("could not save high scores to %s: %s", self.path, e)
            return False
        return True

    def record(self, score: int) -> Tuple[List[int], int]:
        ledger, rank = merge_score(self.load(), score, self.limit)
        self.save(ledger)
        return ledger, rank
