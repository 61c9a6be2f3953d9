from .weighing_process_repository import WeighingProcessRepository

__all__ = ["WeighingProcessRepository"]
