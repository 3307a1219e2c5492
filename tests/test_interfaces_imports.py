def test_can_import_all_protocols():
    # Import must succeed and expose the expected names
    import cxe.core.interfaces as I

    assert hasattr(I, "EnvironmentProtocol")
    assert hasattr(I, "ShellProtocol")
    assert hasattr(I, "LoggerLikeProtocol")
    assert hasattr(I, "LoggerFactoryProtocol")


def test_default_collaborators_satisfy_protocols():
    import cxe.core.interfaces as I
    from cxe.logging.factory import DefaultLoggerFactory
    from cxe.logging.helpers import get_logger
    from cxe.processing.envctx import MappingEnvironment, ProcessEnvironment
    from cxe.runtime.shell import Shell

    assert isinstance(MappingEnvironment(), I.EnvironmentProtocol)
    assert isinstance(ProcessEnvironment(), I.EnvironmentProtocol)
    assert isinstance(Shell(), I.ShellProtocol)
    assert isinstance(DefaultLoggerFactory(), I.LoggerFactoryProtocol)
    assert isinstance(get_logger("runner"), I.LoggerLikeProtocol)
    assert get_logger("runner").name == "cxe.runner"
