"""Token helpers: logit-bias encoding over tiktoken."""

from .logit_bias import Tokenizer, TiktokenTokenizer, encoding_name, get_tokenizer, logit_bias_of_tokens

__all__ = ["Tokenizer", "TiktokenTokenizer", "encoding_name", "get_tokenizer", "logit_bias_of_tokens"]
