import time

class SimpleTimer:
    def __init__(self, name: str):
        self.name = name
        self._start_time = None
        self._end_time = None

    def begin(self):
        self._start_time = time.perf_counter()
        self._end_time = None

    def end(self):
        if self._start_time is None:
            raise RuntimeError(f"Forgot to call begin() before end() on timer {self.name}!")
        self._end_time = time.perf_counter()

    def is_valid(self) -> bool:
        return (self._start_time is not None) and (self._end_time is not None)

    # Seconds between the last begin() and end().
    def elapsed(self) -> float:
        return self._end_time - self._start_time
