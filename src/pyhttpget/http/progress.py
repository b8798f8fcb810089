"""Progress reporting for streamed transfers.

:class:`TqdmProgress` is a ready-made ``progress`` callback for
:func:`~pyhttpget.http.transfer.get_stream` and friends that renders a tqdm
progress bar.
"""

from typing import Optional

from tqdm import tqdm


class TqdmProgress:
    """Progress callback that drives a tqdm bar.

    Usage:
        with open("file.bin", "wb") as f, TqdmProgress(desc="file.bin") as progress:
            get_stream(url, f, progress=progress)

    The bar total is taken from the first callback that reports a known
    length. Unknown lengths (``-1``) leave the bar open-ended.
    """

    def __init__(self, desc: Optional[str] = None, disable: bool = False, **tqdm_kwargs):
        """Initialize the progress bar.

        Args:
            desc: Label shown in front of the bar
            disable: Create the bar but render nothing
            **tqdm_kwargs: Extra keyword arguments passed to tqdm
        """
        tqdm_kwargs.setdefault("unit", "B")
        tqdm_kwargs.setdefault("unit_scale", True)
        tqdm_kwargs.setdefault("unit_divisor", 1024)
        self.bar = tqdm(total=None, desc=desc, disable=disable, **tqdm_kwargs)

    def __call__(self, transferred: int, total: int) -> None:
        if total >= 0 and self.bar.total != total:
            self.bar.total = total
            self.bar.refresh()
        if transferred > self.bar.n:
            self.bar.update(transferred - self.bar.n)

    @property
    def transferred(self) -> int:
        """Bytes reported so far."""
        return self.bar.n

    def close(self):
        """Close the progress bar."""
        self.bar.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
