"""
Identity-H CMap: two-byte codes map straight onto the CID of the same value.

Resource text follows https://github.com/adobe-type-tools/cmap-resources/blob/master/cmapresources_identity-0.zip
with the 256 per-row cidranges folded into a single range.
"""

from . import parse

class CMapIdentityH:
	# CMap object built from cmap_identity_h
	cmap = None

	def __init__(self):
		self.cmap = parse(CMapIdentityH.cmap_identity_h)

	cmap_identity_h = """
%!PS-Adobe-3.0 Resource-CMap
%%DocumentNeededResources: ProcSet (CIDInit)
%%IncludeResource: ProcSet (CIDInit)
%%BeginResource: CMap (Identity-H)
%%Title: (Identity-H Adobe Identity 0)
%%Version: 10.005
%%EndComments

/CIDInit /ProcSet findresource begin

12 dict begin

begincmap

/CIDSystemInfo 3 dict dup begin
  /Registry (Adobe) def
  /Ordering (Identity) def
  /Supplement 0 def
end def

/CMapName /Identity-H def
/CMapVersion 10.005 def
/CMapType 1 def

/XUID [1 10 25404 9999] def

/WMode 0 def

1 begincodespacerange
  <0000> <FFFF>
endcodespacerange

1 begincidrange
<0000> <ffff> 0
endcidrange
endcmap
CMapName currentdict /CMap defineresource pop
end
end

%%EndResource
%%EOF
"""
