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

from bitcoindecoder.domain.transaction_annotation import BtcOutputAnnotation
from bitcoindecoder.domain.transaction_output import BtcTransactionOutput
from bitcoindecoder.mappers.script_classification_mapper import (
    BtcScriptClassificationMapper,
)
from bitcoindecoder.service.btc_script_service import disassemble
from bitcoindecoder.utils import hex_to_bytes


class BtcTransactionOutputMapper(object):
    def __init__(self):
        self.classification_mapper = BtcScriptClassificationMapper()

    def outputs_to_dicts(
        self,
        outputs: Sequence[BtcTransactionOutput],
        annotations: Optional[Sequence[BtcOutputAnnotation]] = None,
    ) -> List[Dict]:
        result = []
        for index, output in enumerate(outputs):
            item = {
                "index": index,
                "value": output.value,
                "script_hex": output.script_pubkey.hex(),
                "script_asm": disassemble(output.script_pubkey),
            }
            if annotations is not None:
                annotation = annotations[index]
                item["is_sentinel_value"] = annotation.is_sentinel_value
                item["classification"] = (
                    self.classification_mapper.classification_to_dict(
                        annotation.classification
                    )
                )
                item["type"] = annotation.classification.script_type
                item["req_sigs"] = annotation.classification.req_sigs
            result.append(item)
        return result

    def dicts_to_outputs(self, json_dicts: List[Dict]) -> List[BtcTransactionOutput]:
        result = []
        for json_dict in json_dicts:
            output = BtcTransactionOutput(
                value=json_dict["value"],
                script_pubkey=hex_to_bytes(json_dict.get("script_hex") or ""),
            )
            result.append(output)
        return result
