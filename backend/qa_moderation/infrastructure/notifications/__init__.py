from .after_commit_notifier import AfterCommitNotifier
from .background_notifier import BackgroundNotifier

__all__ = ["AfterCommitNotifier", "BackgroundNotifier"]
