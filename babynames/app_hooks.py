from typing import Optional, Protocol


class AppHooks(Protocol):
    """
    Protocol for application hooks to follow a long-running pass.

    The aggregator and the analysis pipeline call these when a hooks
    object is supplied, e.g. to drive a progress bar.
    """
    def report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report progress of the current pass.

        Args:
            info (str): Progress message.
            target (int): Total number of steps, when starting a pass.
            reset_counter (bool): Start counting from zero.
            plus_step (int): Steps completed since the last report.
        """
        pass


def report_step(app_hooks, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0, log=None) -> None:
    """Forward a step to app hooks if they support it, else log it at debug level."""
    if app_hooks and callable(getattr(app_hooks, "report_step", None)):
        app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
    elif log is not None and info:
        log.debug(info)
