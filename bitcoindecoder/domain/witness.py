# MIT License
#
# Copyright (c) 2018 Omidiora Samuel, samparsky@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from typing import NamedTuple, Optional, Tuple

# BIP341: the last witness item is an annex when it starts with this byte
ANNEX_TAG = 0x50


class BtcWitness(NamedTuple):
    stack: Tuple[bytes, ...] = ()

    def is_empty(self) -> bool:
        return len(self.stack) == 0

    def has_annex(self) -> bool:
        # a single item is never an annex
        return (
            len(self.stack) >= 2
            and len(self.stack[-1]) > 0
            and self.stack[-1][0] == ANNEX_TAG
        )

    def annex(self) -> Optional[bytes]:
        return self.stack[-1] if self.has_annex() else None

    def stack_without_annex(self) -> Tuple[bytes, ...]:
        return self.stack[:-1] if self.has_annex() else self.stack
