"""Modelos do domínio (Pydantic v2).

Por que Pydantic no domínio:
- O envelope de resultado tem um invariante (sucesso => dados, falha => erro)
  que vale a pena validar na construção.
- As respostas da API são tipadas apenas parcialmente: só os campos que o
  cliente consulta (`filtros`, `boletins`, `boletim`) são declarados; o resto
  passa intacto como campo extra.

Nota:
- Estes modelos descrevem *o que* a API devolve, não *como* é obtido.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope uniforme devolvido por todas as operações do cliente.

    Regras:
    - `success=True` exige `data` presente e `error` ausente.
    - `success=False` exige `error` presente.
    - `status` leva o código HTTP quando conhecido (500 para falhas sem HTTP).
    """

    success: bool = Field(..., description="Indica se a chamada terminou com dados válidos.")
    data: T | None = Field(default=None, description="Corpo decodificado da resposta.")
    error: str | None = Field(default=None, description="Mensagem legível da falha.")
    status: int | None = Field(default=None, description="Código HTTP (ou 500).")

    @model_validator(mode="after")
    def _check_envelope(self) -> "ApiResponse[T]":
        if self.success:
            if self.data is None:
                raise ValueError("success=True requires data")
            if self.error is not None:
                raise ValueError("success=True must not carry an error")
        elif self.error is None:
            raise ValueError("success=False requires an error message")
        return self


class UltimoBoletim(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    datahora_fechamento: str | None = None
    numero_edital: str | None = None


class Filtro(BaseModel):
    """Filtro de busca salvo no ConLicitação."""

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., description="Identificador do filtro.")
    descricao: str = Field(..., description="Descrição cadastrada pelo cliente.")
    ultimo_boletim: UltimoBoletim | None = Field(
        default=None,
        description="Boletim mais recente que casou com o filtro, se houver.",
    )


class BoletimResumo(BaseModel):
    """Referência leve a um boletim (demais campos passam como extras)."""

    model_config = ConfigDict(extra="allow")

    id: int


class FiltrosClienteResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    filtros: list[Any] = Field(default_factory=list)


class BoletinsResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    boletins: list[Any] = Field(default_factory=list)


class DetalhesBoletimResponse(BaseModel):
    """Detalhe de boletim: só a presença da chave `boletim` é garantida."""

    model_config = ConfigDict(extra="allow")

    boletim: Any
