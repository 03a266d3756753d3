# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from typing import List

from vcd_sdk.client import get_tenant_context_headers
from vcd_sdk.client import TenantContext
from vcd_sdk.client import VcdClient
from vcd_sdk.common.utils.core_utils import one_or_error
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.models.openapi_models import CertificateLibraryItem


def _config(tenant_context, query_parameters=None):
    return generic_crud.CrudConfig(
        endpoint=CloudApiResource.SSL_CERTIFICATE_LIBRARY,
        entity_label='certificate',
        query_parameters=query_parameters,
        additional_header=get_tenant_context_headers(tenant_context))


class Certificate:
    def __init__(self, client: VcdClient,
                 certificate: CertificateLibraryItem,
                 tenant_context: TenantContext = None):
        self.client = client
        self.certificate = certificate
        self.tenant_context = tenant_context

    @property
    def id(self):
        return self.certificate.id

    def update(self) -> 'Certificate':
        self.certificate = generic_crud.update_inner_entity(
            self.client, _config(self.tenant_context), self.id,
            self.certificate, CertificateLibraryItem)
        return self

    def delete(self):
        if not self.id:
            raise ValueError("cannot delete certificate without id")
        generic_crud.delete_entity_by_id(self.client,
                                         _config(self.tenant_context),
                                         self.id)
        self.certificate.id = None


class CertificateLibrary:
    """Certificate library of the provider or, with a tenant context, of an org."""  # noqa: E501

    def __init__(self, client: VcdClient,
                 tenant_context: TenantContext = None):
        self.client = client
        self.tenant_context = tenant_context

    def _wrap(self, certificate):
        return Certificate(self.client, certificate, self.tenant_context)

    def get_all_certificates(self, query_parameters=None) -> List[Certificate]:  # noqa: E501
        return generic_crud.get_all_outer_entities(
            self.client, self._wrap,
            _config(self.tenant_context, query_parameters),
            CertificateLibraryItem)

    def get_certificate_by_id(self, certificate_id) -> Certificate:
        if not certificate_id:
            raise ValueError("empty certificate id")
        return generic_crud.get_outer_entity(
            self.client, self._wrap, _config(self.tenant_context),
            certificate_id, CertificateLibraryItem)

    def get_certificate_by_alias(self, alias) -> Certificate:
        """Get a certificate by its alias.

        Aliases with commas or semicolons can't be filtered on, all
        certificates are fetched and compared instead.

        :raises EntityNotFoundError: if there is no such certificate
        :raises MultipleEntitiesFoundError: if several certificates have it
        """
        if not alias:
            raise ValueError("empty certificate alias")
        if ',' in alias or ';' in alias:
            certificates = [certificate for certificate in
                            self.get_all_certificates()
                            if certificate.certificate.alias == alias]
            return one_or_error('alias', alias, certificates)
        return self._wrap(generic_crud.get_inner_entity_by_name(
            self.client, _config(self.tenant_context), alias,
            CertificateLibraryItem, name_field='alias'))

    def add_certificate(self, certificate: CertificateLibraryItem) -> Certificate:  # noqa: E501
        """Upload a certificate, with its private key if given."""
        if not certificate.alias or not certificate.certificate:
            raise ValueError("certificate alias and content are required")
        return generic_crud.create_outer_entity(
            self.client, self._wrap, _config(self.tenant_context),
            certificate, CertificateLibraryItem)
