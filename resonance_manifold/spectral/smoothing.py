from __future__ import annotations

from dataclasses import dataclass

import torch

from .basis import SignalLike, as_signal


@dataclass
class WaveletSmoother:
    """Multi-pass Haar denoiser with hard detail thresholding.

    Each pass writes pairwise averages into the first half of the working buffer
    and thresholded differences into the second half. The final reconstruction
    is single-level: it pairs the first half with the second half.
    """

    levels: int = 2
    threshold: float = 0.1

    def smooth(self, signal: SignalLike) -> torch.Tensor:
        data = as_signal(signal).clone()
        n = data.numel()
        half = n // 2
        pairs = half

        temp = torch.zeros_like(data)
        for _ in range(self.levels):
            even = data[0 : 2 * pairs : 2]
            odd = data[1 : 2 * pairs : 2]
            avg = (even + odd) / 2.0
            diff = (even - odd) / 2.0
            diff = torch.where(diff.abs() > self.threshold, diff, torch.zeros_like(diff))
            temp[:pairs] = avg
            temp[half : half + pairs] = diff
            data = temp.clone()

        recon = torch.zeros_like(data)
        avg = data[:pairs]
        diff = data[half : half + pairs]
        recon[0 : 2 * pairs : 2] = avg + diff
        recon[1 : 2 * pairs : 2] = avg - diff
        return recon
