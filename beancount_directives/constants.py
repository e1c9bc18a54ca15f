import logging

PACKAGE_NAME = "beancount_directives"
GRAMMAR_FOLDER = "grammars"
GRAMMAR_FILE = "beancount.lark"
# lark token type of the end of input in parser errors
END_TOKEN_TYPE = "$END"
# key naming the directive kind in dumped output
DIRECTIVE_TYPE_KEY = "directive"
# below DEBUG, dumps every token
VERBOSE_LOG_LEVEL = 5

logging.addLevelName(VERBOSE_LOG_LEVEL, "VERBOSE")
