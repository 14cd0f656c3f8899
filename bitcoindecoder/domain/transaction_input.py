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

from typing import NamedTuple, Optional

from bitcoindecoder.domain.witness import BtcWitness

NULL_TXID = b"\x00" * 32
NULL_VOUT = 0xFFFFFFFF


class BtcOutPoint(NamedTuple):
    # wire order, reverse it for the conventional display form
    txid: bytes
    vout: int

    def txid_hex(self) -> str:
        return self.txid[::-1].hex()

    def is_null(self) -> bool:
        return self.txid == NULL_TXID and self.vout == NULL_VOUT


class BtcTransactionInput(NamedTuple):
    previous_output: BtcOutPoint
    script_sig: bytes
    sequence: int
    # None when the transaction carries no witness section at all
    witness: Optional[BtcWitness] = None

    def is_coinbase(self) -> bool:
        return self.previous_output.is_null()

    def has_witness_items(self) -> bool:
        return self.witness is not None and not self.witness.is_empty()
