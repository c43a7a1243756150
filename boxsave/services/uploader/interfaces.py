from abc import ABC, abstractmethod

class ProgressReporter(ABC):
    """UI surface that upload and cleanup messages are rendered on"""
    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def clear_line(self) -> None:
        pass

    @abstractmethod
    def report_progress(self, sent: int, total: int) -> None:
        pass
