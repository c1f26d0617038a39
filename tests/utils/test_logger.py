from contextlib import contextmanager

from cadence.utils.logger import Logger, get_global_logger, set_global_logger


@contextmanager
def listen(logger):
    records = []

    def listener(logstr, level):
        records.append((logstr, level))

    logger.add_log_listener(listener)
    try:
        yield records
    finally:
        logger.remove_log_listener(listener)


def test_singleton():
    assert Logger() is Logger()
    assert get_global_logger() is Logger()
    logger = Logger()
    assert set_global_logger(logger) is logger
    assert get_global_logger() is logger


def test_format():
    logger = Logger()
    line = logger.format('schedule', '', 'CosAnneal')
    assert line.endswith(' | schedule | CosAnneal\n')
    assert logger.format('t', 3, raw=True) == 't | 3\n'


def test_level():
    logger = Logger()
    with listen(logger) as records:
        logger.info('schedule', 'CosAnneal')
        logger.debug('hidden')
        logger.warn('careful')
        logger.raw('plain')

    strings = [i for i, _ in records]
    assert any(i.endswith('schedule | CosAnneal\n') for i in strings)
    assert not any('hidden' in i for i in strings)
    assert any('WARN | careful' in i for i in strings)
    assert records[-1] == ('plain\n', Logger.V_INFO)
    assert logger.listener == []


def test_set_verbose():
    logger = Logger()
    with listen(logger) as records:
        logger.set_verbose(Logger.V_DEBUG)
        try:
            logger.debug('shown')
        finally:
            logger.set_verbose(Logger.V_INFO)
        logger.debug('hidden again')
    strings = [i for i, _ in records]
    assert any('DEBUG | shown' in i for i in strings)
    assert not any('hidden again' in i for i in strings)


def test_stdout(capsys):
    logger = Logger()
    logger.raw('to stdout')
    logger.warn('to stderr')
    captured = capsys.readouterr()
    assert captured.out == 'to stdout\n'
    assert 'WARN | to stderr' in captured.err

    logger.toggle_stdout(False)
    try:
        with listen(logger) as records:
            logger.raw('silent')
    finally:
        logger.toggle_stdout(True)
    assert capsys.readouterr().out == ''
    assert records == [('silent\n', Logger.V_INFO)]


def test_rich(capsys):
    logger = Logger()
    logger.try_rich = True
    try:
        logger.raw('[bold]lr[/bold]')
    finally:
        logger.try_rich = False
    out = capsys.readouterr().out
    assert 'lr' in out
    assert '[bold]' not in out
