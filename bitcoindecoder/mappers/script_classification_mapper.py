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

from typing import Dict, Optional

from bitcoindecoder.domain.script_classification import BtcScriptClassification
from bitcoindecoder.domain.timelock import BtcRelativeLock, BtcAbsoluteLock
from bitcoindecoder.utils import bytes_to_hex


class BtcScriptClassificationMapper(object):
    def classification_to_dict(
        self, classification: Optional[BtcScriptClassification]
    ) -> Optional[Dict]:
        if classification is None:
            return None
        return {
            "type": classification.script_type,
            "description": classification.describe(),
            "signature_scheme": classification.signature_scheme,
            "witness_version": classification.witness_version,
            "program": bytes_to_hex(classification.program),
            "req_sigs": classification.req_sigs,
            "total_keys": classification.total_keys,
            "inner_type": classification.inner_type,
        }

    def relative_lock_to_dict(self, lock: BtcRelativeLock) -> Dict:
        return {
            "type": lock.lock_type,
            "value": lock.value,
            "seconds": lock.seconds(),
        }

    def absolute_lock_to_dict(self, lock: BtcAbsoluteLock) -> Dict:
        return {
            "type": lock.lock_type,
            "value": lock.value,
            "enforced": lock.enforced,
        }
