"""
persisted best score

a single scalar kept in a small pickled key-value file. the file is
unpickled on load, so the path (including GAME2048_BEST_SCORE_PATH)
must point somewhere only the player can write.
"""
import os
import pickle


BEST_SCORE_KEY = '2048_best_score'
DEFAULT_PATH = os.environ.get(
    'GAME2048_BEST_SCORE_PATH',
    os.path.join(os.path.expanduser('~'), '.game2048', 'best_score.pkl'),
)


class BestScoreStore:
    def __init__(self, path=None, key=BEST_SCORE_KEY):
        self.path = path or DEFAULT_PATH
        self.key = key

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'rb') as f:
                data = pickle.load(f)
        except (OSError, EOFError, pickle.UnpicklingError, ValueError,
                AttributeError, ImportError, IndexError, TypeError) as e:
            print(f"[WARNING] Could not read best score from {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self):
        """stored best score, 0 if nothing has been saved yet"""
        value = self._read().get(self.key, 0)
        return value if isinstance(value, int) and value > 0 else 0

    def update(self, score):
        """
        save score if it beats the stored best

        returns the best score after the update. write failures are
        reported and leave the stored value as it was.
        """
        data = self._read()
        best = data.get(self.key, 0)
        if not isinstance(best, int):
            best = 0
        if score <= best:
            return best

        data[self.key] = score
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'wb') as f:
                pickle.dump(data, f)
        except OSError as e:
            print(f"[WARNING] Could not save best score to {self.path}: {e}")
        return score
