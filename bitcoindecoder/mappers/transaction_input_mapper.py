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

from typing import List, Dict, Optional, Sequence

from bitcoindecoder.domain.transaction_annotation import BtcInputAnnotation
from bitcoindecoder.domain.transaction_input import BtcOutPoint, BtcTransactionInput
from bitcoindecoder.domain.witness import BtcWitness
from bitcoindecoder.mappers.script_classification_mapper import (
    BtcScriptClassificationMapper,
)
from bitcoindecoder.service.btc_script_service import disassemble
from bitcoindecoder.utils import hex_to_bytes


class BtcTransactionInputMapper(object):
    def __init__(self):
        self.classification_mapper = BtcScriptClassificationMapper()

    def inputs_to_dicts(
        self,
        inputs: Sequence[BtcTransactionInput],
        annotations: Optional[Sequence[BtcInputAnnotation]] = None,
    ) -> List[Dict]:
        result = []
        for index, input in enumerate(inputs):
            annotation = annotations[index] if annotations is not None else None
            result.append(self.input_to_dict(index, input, annotation))
        return result

    def input_to_dict(
        self,
        index: int,
        input: BtcTransactionInput,
        annotation: Optional[BtcInputAnnotation] = None,
    ) -> Dict:
        item = {
            "index": index,
            "spent_transaction_hash": input.previous_output.txid_hex(),
            "spent_output_index": input.previous_output.vout,
            "script_hex": input.script_sig.hex(),
            "script_asm": disassemble(input.script_sig),
            "sequence": input.sequence,
            "txinwitness": None,
        }
        if input.witness is not None:
            item["txinwitness"] = [e.hex() for e in input.witness.stack]

        if annotation is not None:
            item["is_coinbase"] = annotation.is_coinbase
            item["classification"] = self.classification_mapper.classification_to_dict(
                annotation.classification
            )
            item["type"] = annotation.classification.script_type
            item["relative_lock"] = self.classification_mapper.relative_lock_to_dict(
                annotation.relative_lock
            )
            item["witness_items"] = list(annotation.witness_items)
        return item

    def dicts_to_inputs(self, json_dicts: List[Dict]) -> List[BtcTransactionInput]:
        result = []
        for json_dict in json_dicts:
            witness = None
            if json_dict.get("txinwitness") is not None:
                witness = BtcWitness(
                    stack=tuple(hex_to_bytes(e) for e in json_dict["txinwitness"])
                )
            # display order back to wire order
            txid = hex_to_bytes(json_dict["spent_transaction_hash"])[::-1]
            input = BtcTransactionInput(
                previous_output=BtcOutPoint(
                    txid=txid, vout=json_dict["spent_output_index"]
                ),
                script_sig=hex_to_bytes(json_dict.get("script_hex") or ""),
                sequence=json_dict["sequence"],
                witness=witness,
            )
            result.append(input)
        return result
