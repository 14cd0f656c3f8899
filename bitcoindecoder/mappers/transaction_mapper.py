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

from typing import Optional, Dict

from bitcoindecoder.domain.transaction import BtcTransaction
from bitcoindecoder.domain.transaction_annotation import BtcTransactionAnnotation
from bitcoindecoder.mappers.script_classification_mapper import (
    BtcScriptClassificationMapper,
)
from bitcoindecoder.mappers.transaction_input_mapper import BtcTransactionInputMapper
from bitcoindecoder.mappers.transaction_output_mapper import BtcTransactionOutputMapper


# field names follow bitcoind's decoderawtransaction where one exists
class BtcTransactionMapper(object):
    def __init__(self):
        self.transaction_input_mapper = BtcTransactionInputMapper()
        self.transaction_output_mapper = BtcTransactionOutputMapper()
        self.classification_mapper = BtcScriptClassificationMapper()

    def transaction_to_dict(
        self,
        transaction: BtcTransaction,
        annotation: Optional[BtcTransactionAnnotation] = None,
    ) -> Dict:
        result = {
            "type": "transaction",
            "version": transaction.version,
            "has_witness": transaction.has_witness,
            "locktime": transaction.locktime,
            "is_coinbase": transaction.is_coinbase(),
            "input_count": len(transaction.inputs),
            "output_count": len(transaction.outputs),
            "output_value": transaction.calculate_output_value(),
            "inputs": self.transaction_input_mapper.inputs_to_dicts(
                transaction.inputs,
                annotation.inputs if annotation is not None else None,
            ),
            "outputs": self.transaction_output_mapper.outputs_to_dicts(
                transaction.outputs,
                annotation.outputs if annotation is not None else None,
            ),
        }

        if annotation is not None:
            result.update(
                {
                    "hash": annotation.txid,
                    "wtxid": annotation.wtxid,
                    "size": annotation.size,
                    "vsize": annotation.vsize,
                    "weight": annotation.weight,
                    "absolute_lock": self.classification_mapper.absolute_lock_to_dict(
                        annotation.absolute_lock
                    ),
                    "signals_rbf": annotation.signals_rbf,
                    "anomalies": list(annotation.anomalies),
                }
            )
        return result

    def dict_to_transaction(self, json_dict: Dict) -> BtcTransaction:
        return BtcTransaction(
            version=json_dict["version"],
            has_witness=json_dict.get("has_witness", False),
            inputs=tuple(
                self.transaction_input_mapper.dicts_to_inputs(
                    json_dict.get("inputs", [])
                )
            ),
            outputs=tuple(
                self.transaction_output_mapper.dicts_to_outputs(
                    json_dict.get("outputs", [])
                )
            ),
            locktime=json_dict["locktime"],
        )
