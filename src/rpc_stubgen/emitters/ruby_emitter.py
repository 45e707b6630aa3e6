"""Ruby net/http client."""

from __future__ import annotations

from rpc_stubgen.naming import NameConvention
from rpc_stubgen.schema_management import Method
from rpc_stubgen.type_mapping import RUBY_TYPES, map_type
from rpc_stubgen.validation_synthesis import ValidationPlan

from .emitter_contract import GENERATED_NOTICE, MemberField, SourceEmitter, SourceWriter
from .source_text import capitalize, constraint_extras

_MODULE = """
require 'net/http'
require 'net/https'
require 'json'

module {module_name}
  class {class_name}
    # Error is raised when an API call fails due to a 4xx or 5xx HTTP error.
    class Error < StandardError
      attr_reader :type
      attr_reader :message
      attr_reader :status

      def initialize(status, type = nil, message = nil)
        @status = status
        @type = type
        @message = message
      end

      def to_s
        if @type
          "#{{@status}} response: #{{@type}}: #{{@message}}"
        else
          "#{{@status}} response"
        end
      end
    end

    # Initialize the client with API endpoint URL and optional authentication token.
    def initialize(url, auth_token = nil)
      @url = url
      @auth_token = auth_token
    end
"""

_CALL = """
    private

    # call an API method with optional input parameters.
    def call(method, params = nil)
      url = @url + "/" + method
      header = { "Content-Type" => "application/json" }

      if @auth_token
        header["Authorization"] = "Bearer #{@auth_token}"
      end

      res = Net::HTTP.post URI(url), params.to_json, header
      status = res.code.to_i

      if status >= 400
        begin
          body = JSON.parse(res.body)
        rescue JSON::ParserError
          raise Error.new(status)
        end
        raise Error.new(status, body["type"], body["message"])
      end

      res.body
    end
  end
end
"""


class RubyEmitter(SourceEmitter):
    """Ruby client class; inputs and outputs travel as hashes."""

    type_system = RUBY_TYPES

    def reserved_identifiers(self, convention: NameConvention) -> tuple[str, ...]:
        if convention == NameConvention.MEMBER_CASE and self.options.include_client:
            return ("call", "initialize")
        return ()

    def emit_header(self, writer: SourceWriter) -> None:
        writer.line(f"# {GENERATED_NOTICE}")
        writer.line()

    def emit_type_declaration(
        self, writer: SourceWriter, name: str, description: str, members: list[MemberField]
    ) -> None:
        """Ruby callers exchange plain hashes, so no declaration is written."""

    def emit_input_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        """Inputs are documented on the client method instead."""

    def emit_output_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        """Outputs are documented on the client method instead."""

    def emit_validation(
        self,
        writer: SourceWriter,
        name: str,
        plan: ValidationPlan,
        members: list[MemberField],
    ) -> None:
        """Validation runs server side for Ruby clients."""

    def emit_client_preamble(self, writer: SourceWriter) -> None:
        writer.block(
            _MODULE.format(
                module_name=self.options.ruby_module, class_name=self.options.ruby_class
            )
        )

    def emit_client_stub(self, writer: SourceWriter, method: Method) -> None:
        function = self.method_name(method)
        writer.line()
        writer.line(f"# {capitalize(method.description) or function}", indent=2)
        if method.inputs:
            writer.line("#", indent=2)
            writer.line("# @param [Hash] params the input for this method.", indent=2)
            for field in method.inputs:
                ruby_type = map_type(self.schema, field, self.type_system, owner=method.name)
                summary = f"{capitalize(field.description)}{constraint_extras(field)}".strip()
                writer.line(f"# @option params [{ruby_type}] :{field.name} {summary}".rstrip(), 2)
        if method.outputs:
            writer.line("# @return [Hash] the output of this method.", indent=2)

        writer.line(f"def {function}" + ("(params)" if method.inputs else ""), indent=2)
        arguments = _ruby_string(method.name) + (", params" if method.inputs else "")
        if method.outputs:
            writer.line(f"JSON.parse(call({arguments}))", indent=3)
        else:
            writer.line(f"call {arguments}", indent=3)
            writer.line("nil", indent=3)
        writer.line("end", indent=2)

    def emit_client_postamble(self, writer: SourceWriter) -> None:
        writer.line()
        writer.block(_CALL)


def _ruby_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
