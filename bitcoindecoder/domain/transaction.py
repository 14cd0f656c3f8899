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

from typing import NamedTuple, Tuple

from bitcoindecoder.domain.transaction_input import BtcTransactionInput
from bitcoindecoder.domain.transaction_output import BtcTransactionOutput


# https://en.bitcoin.it/wiki/Protocol_documentation#tx
# https://github.com/bitcoin/bips/blob/master/bip-0144.mediawiki
class BtcTransaction(NamedTuple):
    version: int
    has_witness: bool
    inputs: Tuple[BtcTransactionInput, ...]
    outputs: Tuple[BtcTransactionOutput, ...]
    locktime: int

    def is_coinbase(self) -> bool:
        return len(self.inputs) == 1 and self.inputs[0].is_coinbase()

    def calculate_output_value(self) -> int:
        return sum(
            output.value for output in self.outputs if not output.is_sentinel_value()
        )
