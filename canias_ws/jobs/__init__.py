"""Job layer package for node execution boundaries."""

from .interfaces import NodeExecutorPort, NodeOutputItem
from .node_executor import CaniasNodeExecutor, NodeExecutorConfig, job_build_output_record
from .parameters import AdvancedOptions, NodeParameters, job_parse_node_parameters

__all__ = [
	"AdvancedOptions",
	"CaniasNodeExecutor",
	"NodeExecutorConfig",
	"NodeExecutorPort",
	"NodeOutputItem",
	"NodeParameters",
	"job_build_output_record",
	"job_parse_node_parameters",
]
