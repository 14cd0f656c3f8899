# structures the wire format allows but a well-formed transaction avoids
class TxAnomaly:
    NO_INPUTS = "no_inputs"
    NO_OUTPUTS = "no_outputs"
    SENTINEL_VALUE = "sentinel_value"
    EMPTY_WITNESS_SECTION = "empty_witness_section"
    MULTIPLE_ANCHORS = "multiple_anchors"

    DESCRIPTIONS = {
        NO_INPUTS: "transaction has no inputs",
        NO_OUTPUTS: "transaction has no outputs",
        SENTINEL_VALUE: "an output carries the reserved all-ones value",
        EMPTY_WITNESS_SECTION: "witness marker is set but every witness is empty",
        MULTIPLE_ANCHORS: "more than one pay-to-anchor output",
    }
